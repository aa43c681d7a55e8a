"""
Certificate codec adapter — base64 ⇄ DER ⇄ X.509 via cryptography (PyCA).

Decoding: node text → strict base64 → DER → x509.Certificate.
Encoding: x509.Certificate → canonical DER export → base64 text.

The output is a re-encoding of the parsed certificate, not a copy of the
source text: whitespace and line breaks from the XML are gone.
"""

from __future__ import annotations

import base64
import binascii

import structlog
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding
from railway import ErrorCode
from railway.result import Result

from adfs_cert_extract.domain.models import SigningCertificate

log = structlog.get_logger()


def _b64decode_node(encoded: str) -> bytes:
    """
    Decode standard base64, ignoring whitespace only.

    Raises binascii.Error on any other non-alphabet character or bad padding.
    """
    compact = "".join(encoded.split())
    if not compact:
        raise binascii.Error("X509Certificate node is empty")
    return base64.b64decode(compact, validate=True)


def encode_certificate(certificate: SigningCertificate) -> str:
    """Base64 text of the certificate's DER bytes, without PEM armour or newlines."""
    der_bytes = certificate.certificate.public_bytes(Encoding.DER)
    return base64.b64encode(der_bytes).decode("ascii")


class X509CertificateDecoder:
    """
    Decode one X509Certificate node into a SigningCertificate.

    Implements the CertificateDecoder port.
    """

    def decode(self, encoded: str) -> Result[SigningCertificate]:
        """
        Returns Result[SigningCertificate] on success.
        Returns Result.failure(DECODE_ERROR, ...) for invalid base64 or a
        payload that is not a DER X.509 certificate.
        """
        return (
            Result.from_computation(
                lambda: _b64decode_node(encoded),
                ErrorCode.DECODE_ERROR,
                "X509Certificate node is not valid base64",
            )
            .flat_map(
                lambda der_bytes: Result.from_computation(
                    lambda: SigningCertificate(x509.load_der_x509_certificate(der_bytes)),
                    ErrorCode.DECODE_ERROR,
                    "X509Certificate node is not a valid DER certificate",
                )
            )
            .peek(
                lambda cert: log.info(
                    "certificate.decoded",
                    subject=cert.subject,
                    issuer=cert.issuer,
                    serial=cert.serial_number,
                    thumbprint=cert.thumbprint,
                    not_valid_after=cert.not_valid_after.isoformat(),
                )
            )
        )
