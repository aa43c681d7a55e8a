"""
Ports — Protocol-based interfaces for the pipeline's infrastructure adapters.

The pipeline depends only on these contracts; concrete adapters satisfy them
structurally (no inheritance):

  MetadataFetcher     → raw federation metadata text
  MetadataParser      → base64 text of every X509Certificate node
  CertificateDecoder  → SigningCertificate per node
  CertificateWriter   → the written file
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from railway.result import Result

from adfs_cert_extract.domain.models import InvocationConfig, SigningCertificate


@runtime_checkable
class MetadataFetcher(Protocol):
    """
    Port: download the federation metadata document.

    The URL is normalized to the well-known metadata path before the request.
    """

    def fetch(self, url: str) -> Result[str]: ...


@runtime_checkable
class MetadataParser(Protocol):
    """
    Port: locate the certificate nodes in a metadata document.

    Returns the text content of every XML-DSig X509Certificate element, in
    document order. An empty list is a success.
    """

    def parse(self, document: str) -> Result[list[str]]: ...


@runtime_checkable
class CertificateDecoder(Protocol):
    """Port: turn one base64 node text into a SigningCertificate."""

    def decode(self, encoded: str) -> Result[SigningCertificate]: ...


@runtime_checkable
class CertificateWriter(Protocol):
    """Port: persist a certificate to config.certificate_path, overwriting."""

    def write(self, certificate: SigningCertificate, config: InvocationConfig) -> Result[Path]: ...
