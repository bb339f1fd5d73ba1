"""Tests for the response speed evaluator."""

import httpx
import pytest

from scanner.checks.models import CheckStatus, Intent
from scanner.checks.response_stability import check_response_stability, latency_score
from scanner.crawler.fetcher import RetrievedPage


def page(latency_ms: int = 200, status_code: int = 200, error: str | None = None) -> RetrievedPage:
    return RetrievedPage(
        url="https://example.com/",
        final_url="https://example.com/",
        status_code=0 if error else status_code,
        headers=httpx.Headers(),
        html="",
        latency_ms=latency_ms,
        error=error,
    )


class TestLatencyScore:
    """Tests for latency buckets."""

    @pytest.mark.parametrize(
        ("latency", "expected"),
        [(0, 100), (499, 100), (500, 80), (1499, 80), (1500, 50), (2999, 50), (3000, 30), (4999, 30), (5000, 10)],
    )
    def test_buckets(self, latency: int, expected: int) -> None:
        assert latency_score(latency) == expected


class TestCheckResponseStability:
    """Tests for scoring."""

    def test_allow_fast(self) -> None:
        check = check_response_stability(page(latency_ms=120), Intent.ALLOW)
        assert check.score == 100
        assert check.weight == 15
        assert check.summary == "Fast response (120ms)"
        assert check.details == ("HTTP status: 200", "Latency: 120ms")

    def test_block_fast_is_bad(self) -> None:
        check = check_response_stability(page(latency_ms=120), Intent.BLOCK)
        assert check.score == 0
        assert check.weight == 5

    def test_block_slow(self) -> None:
        check = check_response_stability(page(latency_ms=2500), Intent.BLOCK)
        assert check.score == 50
        assert check.summary == "Slow response (2500ms)"

    def test_moderate_summary(self) -> None:
        assert check_response_stability(page(latency_ms=900), Intent.ALLOW).summary == (
            "Moderate response (900ms)"
        )

    def test_non_success_status(self) -> None:
        block = check_response_stability(page(status_code=503), Intent.BLOCK)
        allow = check_response_stability(page(status_code=503), Intent.ALLOW)
        assert block.score == 70
        assert allow.score == 20
        assert allow.summary == "HTTP 503 — non-success response"

    def test_slow_allow_recommendation(self) -> None:
        assert check_response_stability(page(latency_ms=2001), Intent.ALLOW).recommendation is not None
        assert check_response_stability(page(latency_ms=2000), Intent.ALLOW).recommendation is None

    def test_unreachable_allow(self) -> None:
        check = check_response_stability(page(error="Connection refused"), Intent.ALLOW)
        assert check.score == 0
        assert check.status == CheckStatus.FAIL
        assert check.summary == "Site unreachable"
        assert check.details == ("Fetch error: Connection refused",)
        assert "curl -I https://example.com/" in check.recommendation.snippet

    def test_unreachable_block(self) -> None:
        check = check_response_stability(page(error="Connection refused"), Intent.BLOCK)
        assert check.score == 80
        assert check.recommendation is None
