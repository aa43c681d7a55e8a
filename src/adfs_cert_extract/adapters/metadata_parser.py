"""
Federation metadata parser adapter — XML traversal via lxml.

Implements the MetadataParser port: parse the document, then select every
XML-DSig X509Certificate element below the root, at any depth and under any
parent, in document order.

Namespace policy: the XML-DSig namespace is matched in both literal forms,
with and without the trailing '#'. Some metadata publishers emit the
fragment-less form.
"""

from __future__ import annotations

import structlog
from lxml import etree
from railway import ErrorCode
from railway.result import Result

log = structlog.get_logger()

SAML_METADATA_NS = "urn:oasis:names:tc:SAML:2.0:metadata"
XMLDSIG_NS = "http://www.w3.org/2000/09/xmldsig"
XMLDSIG_FRAGMENT_NS = "http://www.w3.org/2000/09/xmldsig#"

NAMESPACES = {
    "md": SAML_METADATA_NS,
    "keys": XMLDSIG_NS,
    "keys1": XMLDSIG_FRAGMENT_NS,
}

# XPath union results come back in document order.
_CERTIFICATE_XPATH = etree.XPath(
    "descendant::keys:X509Certificate | descendant::keys1:X509Certificate",
    namespaces=NAMESPACES,
)


def _secure_parser() -> etree.XMLParser:
    """XML parser with entity expansion and network access disabled."""
    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


class XmlMetadataParser:
    """
    Extract the base64 text of every X509Certificate node.

    Implements the MetadataParser port.
    """

    def parse(self, document: str) -> Result[list[str]]:
        """
        Returns Result[list[str]], possibly empty, on success.
        Returns Result.failure(PARSE_ERROR, ...) if the text is not well-formed XML.
        """
        return Result.from_computation(
            lambda: self._do_parse(document),
            ErrorCode.PARSE_ERROR,
            "Federation metadata is not well-formed XML",
        )

    def _do_parse(self, document: str) -> list[str]:
        # Re-encode so the str can carry an XML declaration; the parser
        # is pinned to utf-8 whatever the declaration says.
        root = etree.fromstring(document.encode("utf-8"), _secure_parser())
        nodes = _CERTIFICATE_XPATH(root)
        certificates = ["".join(node.itertext()) for node in nodes]
        log.info("metadata.parsed", root=etree.QName(root).localname, certificate_nodes=len(certificates))
        return certificates
