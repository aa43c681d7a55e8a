"""
Pipeline — the ROP workflow from metadata URL to certificate file.

Domain layer — no I/O here; every side effect goes through a port.

  fetch(config.url)
    → parse(document)                 list of X509Certificate node texts
      → for each node, in order:
          decode(node) → write(certificate, config)

Each stage returns Result[T]. The first failure short-circuits: nodes
already written stay on disk, later nodes are never touched.
"""

from __future__ import annotations

from railway.result import Result

from adfs_cert_extract.domain.models import InvocationConfig
from adfs_cert_extract.domain.ports import (
    CertificateDecoder,
    CertificateWriter,
    MetadataFetcher,
    MetadataParser,
)


def _decode_and_write(
    nodes: list[str],
    config: InvocationConfig,
    decoder: CertificateDecoder,
    writer: CertificateWriter,
) -> Result[int]:
    """
    Decode and write every node in document order.

    Returns the number of certificates written. All writes target the same
    file, so the last successful node wins.
    """
    written: Result[int] = Result.success(0)
    for node in nodes:
        written = written.flat_map(
            lambda count, node=node: decoder.decode(node)
            .flat_map(lambda certificate: writer.write(certificate, config))
            .map(lambda _path: count + 1)
        )
    return written


def run_pipeline(
    config: InvocationConfig,
    fetcher: MetadataFetcher,
    parser: MetadataParser,
    decoder: CertificateDecoder,
    writer: CertificateWriter,
) -> Result[int]:
    """
    Extract the signing certificate(s) for `config` and write them.

    Returns Result[int] with the number of certificates written (0 when the
    metadata holds no X509Certificate node), or the first failure.
    """
    return (
        fetcher.fetch(config.url)
        .flat_map(parser.parse)
        .flat_map(lambda nodes: _decode_and_write(nodes, config, decoder, writer))
    )
