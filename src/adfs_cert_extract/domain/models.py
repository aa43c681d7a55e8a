"""
Domain models — immutable values passed between pipeline stages.

CommandLine holds what the user typed; InvocationConfig is built from it once
validation succeeds and is then handed explicitly to every later stage.
SigningCertificate wraps a parsed X.509 certificate found in the metadata.

All models are frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes

CERTIFICATE_SUFFIX = "-signing.cer"


@dataclass(frozen=True, slots=True)
class CommandLine:
    """Raw parsed arguments, before any validation."""

    url: str | None = None
    output: str | None = None
    show_help: bool = False


@dataclass(frozen=True, slots=True)
class InvocationConfig:
    """
    Validated invocation settings.

    `host` is the host component of `url`; it only names the output file.
    """

    url: str
    output_path: Path
    host: str

    @property
    def certificate_path(self) -> Path:
        """Where the signing certificate is written: {output_path}/{host}-signing.cer."""
        return self.output_path / f"{self.host}{CERTIFICATE_SUFFIX}"


@dataclass(frozen=True, slots=True)
class SigningCertificate:
    """
    An X.509 certificate decoded from an XML-DSig X509Certificate node.

    The summary properties exist for logging; nothing here checks
    validity dates or the chain.
    """

    certificate: x509.Certificate = field(repr=False)

    @property
    def subject(self) -> str:
        return self.certificate.subject.rfc4514_string()

    @property
    def issuer(self) -> str:
        return self.certificate.issuer.rfc4514_string()

    @property
    def serial_number(self) -> str:
        return hex(self.certificate.serial_number)

    @property
    def thumbprint(self) -> str:
        """SHA-256 fingerprint of the DER encoding, upper-case hex."""
        return self.certificate.fingerprint(hashes.SHA256()).hex().upper()

    @property
    def not_valid_before(self) -> datetime:
        return self.certificate.not_valid_before_utc

    @property
    def not_valid_after(self) -> datetime:
        return self.certificate.not_valid_after_utc
