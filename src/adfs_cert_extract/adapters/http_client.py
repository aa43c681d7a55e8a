"""
HTTP adapter — federation metadata download via httpx.

Adapter layer — implements the MetadataFetcher port with a single synchronous
GET. The URL is first normalized to the well-known AD FS metadata path.

There is no retry: one request per run. Every transport error and every
non-success status is captured into a Result failure; nothing leaks to the
pipeline as an exception.
"""

from __future__ import annotations

import httpx
import structlog
from railway import ErrorCode
from railway.result import Result

log = structlog.get_logger()

METADATA_PATH = "/FederationMetadata/2007-06/FederationMetadata.xml"


def normalize_metadata_url(url: str) -> str:
    """
    Return the URL of the federation metadata document for `url`.

    A URL already containing the metadata path (any letter case) is used as
    given; otherwise the path is appended verbatim.
    """
    if METADATA_PATH.lower() in url.lower():
        return url
    return url + METADATA_PATH


class HttpMetadataFetcher:
    """
    Download AD FS federation metadata as text.

    Implements the MetadataFetcher port.
    """

    def __init__(self, timeout: int = 60) -> None:
        self._timeout = timeout

    def fetch(self, url: str) -> Result[str]:
        """
        GET the normalized metadata URL and return the body as text.

        Returns Result.failure(EXTERNAL_SERVICE_ERROR, ...) on DNS failure,
        refused connection, timeout or a non-2xx status.
        """
        metadata_url = normalize_metadata_url(url)
        return Result.from_computation(
            lambda: self._do_fetch(metadata_url),
            ErrorCode.EXTERNAL_SERVICE_ERROR,
            "Unable to reach url, check the url and try again!",
        )

    def _do_fetch(self, metadata_url: str) -> str:
        """HTTP GET — exceptions caught by from_computation."""
        log.debug("metadata.requesting", url=metadata_url)
        with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
            response = client.get(metadata_url)
            response.raise_for_status()
            text = response.text
            log.info("metadata.fetched", url=metadata_url, size_chars=len(text))
            return text
