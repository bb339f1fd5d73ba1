"""Tests for the scan orchestrator."""

from datetime import UTC, datetime

import httpx
import pytest

from api.exceptions import InvalidRequestError, ScanFailedError
from scanner.checks.models import CHECK_ORDER, CheckStatus, Intent
from scanner.crawler.fetcher import PageRetriever
from scanner.crawler.url import normalize_scan_input
from scanner.tasks.scan import run_scan, score_site

CLEAN_PAGE = """<html lang="en"><head>
<meta name="description" content="An ordinary page that welcomes every reader">
</head><body><main><h1>Hello</h1><h2>World</h2></main></body></html>"""


def retriever_for(handler) -> PageRetriever:
    return PageRetriever(transport=httpx.MockTransport(handler))


class TestRunScan:
    """End-to-end scans against a mocked site."""

    async def test_result_shape(self, site_handler, catalog) -> None:
        result = await run_scan(
            "example.com", "allow", retriever=retriever_for(site_handler(html=CLEAN_PAGE))
        )
        assert result.url == "https://example.com"
        assert result.mode == Intent.ALLOW
        assert result.robots_txt_url == "https://example.com/robots.txt"
        assert tuple(c.id for c in result.checks) == CHECK_ORDER
        assert sum(c.weight for c in result.checks) == 100
        assert 0 <= result.score <= 100
        assert len(result.bots) == len(catalog)
        assert len(result.insights) <= 4
        assert result.scanned_at.tzinfo is not None

    async def test_scenario_no_robots_block(self, site_handler) -> None:
        result = await run_scan("example.com", "block", retriever=retriever_for(site_handler()))
        robots = result.get_check("robotsTxt")
        assert result.robots_txt_found is False
        assert robots.score == 0
        assert robots.status == CheckStatus.FAIL
        assert robots.summary == "No robots.txt found"
        assert all(v.allowed for v in result.bots)

    async def test_scenario_disallow_all_block(self, site_handler) -> None:
        handler = site_handler(robots="User-agent: *\nDisallow: /\n")
        result = await run_scan("example.com", "block", retriever=retriever_for(handler))
        assert result.get_check("robotsTxt").score == 100
        assert not any(v.allowed for v in result.bots)

    async def test_scenario_clean_page_allow(self, site_handler) -> None:
        handler = site_handler(html=CLEAN_PAGE, page_headers={"cache-control": "max-age=60"})
        result = await run_scan("example.com", "allow", retriever=retriever_for(handler))
        assert result.get_check("metaDirectives").score == 100
        assert result.get_check("httpHeaders").score == 100

    async def test_scenario_unreachable_allow(self, site_handler) -> None:
        inner = site_handler()

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/":
                raise httpx.ConnectError("Name or service not known")
            return inner(request)

        result = await run_scan("https://example.com/", "allow", retriever=retriever_for(handler))
        stability = result.get_check("responseStability")
        assert stability.score == 0
        assert stability.status == CheckStatus.FAIL
        assert stability.summary == "Site unreachable"

    async def test_scenario_jsonld_paywall_block(self, site_handler) -> None:
        html = '<html><script type="application/ld+json">{"isAccessibleForFree": false}</script></html>'
        result = await run_scan("example.com", "block", retriever=retriever_for(site_handler(html=html)))
        access = result.get_check("paywallDetection")
        assert "JSON-LD indicates content is not free" in access.details
        assert access.score >= 60

    async def test_deeply_nested_jsonld_still_scores(self, site_handler) -> None:
        html = f'<html><script type="application/ld+json">{"[" * 100000}</script></html>'
        result = await run_scan("example.com", "block", retriever=retriever_for(site_handler(html=html)))
        access = result.get_check("paywallDetection")
        assert access.score == 0
        assert access.details == ("No paywall or login wall detected",)

    async def test_invalid_input_propagates(self) -> None:
        with pytest.raises(InvalidRequestError):
            await run_scan("example.com", "maybe")
        with pytest.raises(InvalidRequestError):
            await run_scan(None, "allow")

    async def test_unexpected_failure_wrapped(self, site_handler) -> None:
        class BrokenRetriever(PageRetriever):
            async def retrieve(self, url: str, base_url: str):
                raise RuntimeError("boom")

        with pytest.raises(ScanFailedError) as exc_info:
            await run_scan("example.com", "allow", retriever=BrokenRetriever())
        assert exc_info.value.message == "boom"
        assert exc_info.value.details == {"url": "https://example.com"}
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestScoreSite:
    """Tests for pure re-scoring of retrieved data."""

    async def _site(self, site_handler):
        handler = site_handler(
            robots="User-agent: GPTBot\nDisallow: /\n",
            html=CLEAN_PAGE,
            files={"/llms.txt": "# Example site\n\nAll about examples."},
        )
        return await retriever_for(handler).retrieve("https://example.com", "https://example.com")

    async def test_deterministic(self, site_handler, catalog) -> None:
        site = await self._site(site_handler)
        target = normalize_scan_input("example.com", "allow")
        when = datetime(2025, 6, 1, tzinfo=UTC)
        assert score_site(target, site, catalog, when) == score_site(target, site, catalog, when)

    async def test_switching_intent_is_rescoring(self, site_handler, catalog) -> None:
        site = await self._site(site_handler)
        block = score_site(normalize_scan_input("example.com", "block"), site, catalog)
        allow = score_site(normalize_scan_input("example.com", "allow"), site, catalog)

        assert [v.allowed for v in block.bots] == [v.allowed for v in allow.bots]
        assert block.get_check("robotsTxt").details[0].startswith("1 of")
        assert (
            block.get_check("contentStructure").score + allow.get_check("contentStructure").score
            == 100
        )
        assert block.get_check("aiDiscoveryFiles").score == 60
        assert allow.get_check("aiDiscoveryFiles").score == 50
