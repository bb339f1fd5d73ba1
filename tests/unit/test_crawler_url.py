"""Tests for scan input normalization."""

import pytest

from api.exceptions import InvalidRequestError
from scanner.checks.models import Intent
from scanner.crawler.url import get_base_url, normalize_scan_input, normalize_url


class TestNormalizeUrl:
    """Tests for normalize_url function."""

    def test_adds_https_when_no_scheme(self) -> None:
        assert normalize_url("example.com") == "https://example.com"
        assert normalize_url("example.com/blog") == "https://example.com/blog"

    def test_keeps_existing_scheme(self) -> None:
        assert normalize_url("http://example.com") == "http://example.com"
        assert normalize_url("https://example.com/page") == "https://example.com/page"

    def test_strips_whitespace(self) -> None:
        assert normalize_url("  example.com  ") == "https://example.com"


class TestGetBaseUrl:
    """Tests for get_base_url function."""

    def test_origin_only(self) -> None:
        assert get_base_url("https://example.com/a/b?c=d") == "https://example.com"

    def test_keeps_port(self) -> None:
        assert get_base_url("http://localhost:8080/page") == "http://localhost:8080"


class TestNormalizeScanInput:
    """Tests for normalize_scan_input function."""

    def test_valid_input(self) -> None:
        target = normalize_scan_input("example.com/pricing", "block")
        assert target.url == "https://example.com/pricing"
        assert target.intent == Intent.BLOCK
        assert target.base_url == "https://example.com"
        assert target.robots_txt_url == "https://example.com/robots.txt"

    @pytest.mark.parametrize(
        ("url", "mode"),
        [(None, "allow"), ("", "allow"), ("   ", "allow"), ("example.com", None), ("example.com", "")],
    )
    def test_missing_fields(self, url: str | None, mode: str | None) -> None:
        with pytest.raises(InvalidRequestError) as exc_info:
            normalize_scan_input(url, mode)
        assert exc_info.value.message == "Missing required fields: url, mode"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("mode", ["Block", "ALLOW", "both", "audit"])
    def test_invalid_mode(self, mode: str) -> None:
        with pytest.raises(InvalidRequestError) as exc_info:
            normalize_scan_input("example.com", mode)
        assert exc_info.value.message == 'Mode must be "block" or "allow"'
        assert exc_info.value.details == {"field": "mode"}

    def test_invalid_port(self) -> None:
        with pytest.raises(InvalidRequestError) as exc_info:
            normalize_scan_input("example.com:notaport", "allow")
        assert exc_info.value.code == "invalid_request"

    def test_no_host(self) -> None:
        with pytest.raises(InvalidRequestError):
            normalize_scan_input("https://", "allow")
