"""
File adapter — writes the signing certificate to disk.

Implements the CertificateWriter port. The target file is always
{output_path}/{host}-signing.cer, so several certificates in one document
overwrite each other and the last one written survives.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from railway import ErrorCode
from railway.result import Result

from adfs_cert_extract.adapters.certificate_codec import encode_certificate
from adfs_cert_extract.domain.models import InvocationConfig, SigningCertificate

log = structlog.get_logger()


class FileCertificateWriter:
    """Write base64 DER certificate text to the configured output directory."""

    def write(self, certificate: SigningCertificate, config: InvocationConfig) -> Result[Path]:
        """
        Returns Result[Path] with the written file on success.
        Returns Result.failure(IO_ERROR, ...) on any filesystem error.
        """
        return Result.from_computation(
            lambda: self._do_write(encode_certificate(certificate), config.certificate_path),
            ErrorCode.IO_ERROR,
            "Writing certificate, check output path!",
        )

    def _do_write(self, text: str, path: Path) -> Path:
        existed = path.exists()
        path.write_text(text, encoding="ascii")
        log.info("certificate.written", path=str(path), overwritten=existed, size_chars=len(text))
        return path
