"""
Unit tests for the HTTP adapter — metadata URL normalization and download.

Uses respx to mock httpx HTTP calls (never makes real HTTP requests).

Test categories:
  - Normalization: well-known path appended, or kept (case-insensitive)
  - Success: 200 → Result.success(body text)
  - Failure: 4xx/5xx, connection errors, timeouts → EXTERNAL_SERVICE_ERROR
  - Single attempt: a failed request is never retried
"""

from __future__ import annotations

import httpx
import pytest
import respx
from railway import ErrorCode, ResultAssertions

from adfs_cert_extract.adapters.http_client import (
    METADATA_PATH,
    HttpMetadataFetcher,
    normalize_metadata_url,
)

BASE_URL = "https://idp.example.com"
METADATA_URL = "https://idp.example.com/FederationMetadata/2007-06/FederationMetadata.xml"


@pytest.fixture()
def fetcher() -> HttpMetadataFetcher:
    return HttpMetadataFetcher(timeout=5)


# ─────────────────────── Normalization ───────────────────────


class TestNormalizeMetadataUrl:
    def test_appends_well_known_path(self) -> None:
        """
        GIVEN https://idp.example.com
        WHEN normalized
        THEN the metadata path is appended.
        """
        assert normalize_metadata_url(BASE_URL) == METADATA_URL

    def test_full_url_is_unchanged(self) -> None:
        assert normalize_metadata_url(METADATA_URL) == METADATA_URL

    @pytest.mark.parametrize(
        "url",
        [
            "https://idp.example.com/federationmetadata/2007-06/federationmetadata.xml",
            "https://idp.example.com/FEDERATIONMETADATA/2007-06/FEDERATIONMETADATA.XML",
            "https://idp.example.com/FederationMetadata/2007-06/FederationMetadata.xml?tenant=a",
        ],
    )
    def test_match_is_case_insensitive(self, url: str) -> None:
        assert normalize_metadata_url(url) == url

    def test_append_is_verbatim(self) -> None:
        """
        GIVEN a base URL with a trailing slash
        WHEN normalized
        THEN the path is appended as-is (no slash collapsing).
        """
        assert normalize_metadata_url(BASE_URL + "/") == BASE_URL + "/" + METADATA_PATH


# ─────────────────────── Fetch ───────────────────────


class TestFetchSuccess:
    @respx.mock
    def test_returns_body_text(self, fetcher: HttpMetadataFetcher) -> None:
        """
        GIVEN the metadata endpoint answers 200 with XML
        WHEN fetch is called with the base URL
        THEN the normalized URL is requested once and its body returned.
        """
        route = respx.get(METADATA_URL).mock(return_value=httpx.Response(200, text="<EntityDescriptor/>"))
        result = fetcher.fetch(BASE_URL)
        assert ResultAssertions.assert_success(result) == "<EntityDescriptor/>"
        assert route.call_count == 1

    @respx.mock
    def test_full_url_is_requested_as_given(self, fetcher: HttpMetadataFetcher) -> None:
        url = "https://idp.example.com/federationmetadata/2007-06/federationmetadata.xml"
        route = respx.get(url).mock(return_value=httpx.Response(200, text="<x/>"))
        ResultAssertions.assert_success(fetcher.fetch(url))
        assert route.called

    @respx.mock
    def test_follows_redirects(self, fetcher: HttpMetadataFetcher) -> None:
        moved = "https://login.example.com/FederationMetadata/2007-06/FederationMetadata.xml"
        respx.get(METADATA_URL).mock(return_value=httpx.Response(302, headers={"Location": moved}))
        respx.get(moved).mock(return_value=httpx.Response(200, text="<moved/>"))
        assert ResultAssertions.assert_success(fetcher.fetch(BASE_URL)) == "<moved/>"


class TestFetchFailure:
    @pytest.mark.parametrize("status", [404, 500, 503])
    @respx.mock
    def test_error_status(self, fetcher: HttpMetadataFetcher, status: int) -> None:
        """
        GIVEN the endpoint answers with a non-success status
        WHEN fetch is called
        THEN it returns EXTERNAL_SERVICE_ERROR carrying the HTTPStatusError.
        """
        respx.get(METADATA_URL).mock(return_value=httpx.Response(status))
        error = ResultAssertions.assert_failure(fetcher.fetch(BASE_URL), ErrorCode.EXTERNAL_SERVICE_ERROR)
        assert isinstance(error.exception, httpx.HTTPStatusError)
        assert "unable to reach url" in error.message.lower()

    @respx.mock
    def test_connection_refused_is_not_retried(self, fetcher: HttpMetadataFetcher) -> None:
        route = respx.get(METADATA_URL).mock(side_effect=httpx.ConnectError("Connection refused"))
        error = ResultAssertions.assert_failure(fetcher.fetch(BASE_URL), ErrorCode.EXTERNAL_SERVICE_ERROR)
        assert error.detail == "Connection refused"
        assert route.call_count == 1

    @respx.mock
    def test_timeout(self, fetcher: HttpMetadataFetcher) -> None:
        respx.get(METADATA_URL).mock(side_effect=httpx.ReadTimeout("timed out"))
        error = ResultAssertions.assert_failure(fetcher.fetch(BASE_URL), ErrorCode.EXTERNAL_SERVICE_ERROR)
        assert isinstance(error.exception, httpx.TimeoutException)

    def test_unsupported_scheme_never_raises(self, fetcher: HttpMetadataFetcher) -> None:
        result = fetcher.fetch("ftp://idp.example.com")
        ResultAssertions.assert_failure(result, ErrorCode.EXTERNAL_SERVICE_ERROR)
