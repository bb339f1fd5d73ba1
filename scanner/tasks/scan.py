"""Scan orchestrator.

Normalize input, fetch everything in parallel, run the seven evaluators,
then aggregate. Retrieval problems are scored, not raised; the only
errors a caller sees are InvalidRequestError (bad input) and
ScanFailedError (a bug or an unreadable crawler catalog).
"""

from collections.abc import Sequence
from datetime import UTC, datetime

import structlog
from bs4 import BeautifulSoup

from api.exceptions import ScanFailedError
from scanner.checks import (
    check_access_control,
    check_ai_discovery_files,
    check_content_structure,
    check_http_headers,
    check_meta_directives,
    check_response_stability,
    check_robots_txt,
)
from scanner.checks.models import ScanResult
from scanner.crawler.catalog import CrawlerIdentity, load_crawler_catalog
from scanner.crawler.fetcher import PageRetriever, RetrievedSite
from scanner.crawler.url import ScanTarget, normalize_scan_input
from scanner.scoring.aggregate import build_summary, calculate_final_score, generate_insights

logger = structlog.get_logger(__name__)


def score_site(
    target: ScanTarget,
    site: RetrievedSite,
    catalog: Sequence[CrawlerIdentity],
    scanned_at: datetime | None = None,
) -> ScanResult:
    """
    Run every evaluator over already-retrieved data and aggregate.

    Pure apart from the timestamp: the same inputs always give the same
    checks, so switching intent is just a re-score.
    """
    soup = BeautifulSoup(site.page.html, "html.parser")
    intent = target.intent

    robots_check, verdicts = check_robots_txt(site.robots, target.url, catalog, intent)
    checks = (
        robots_check,
        check_meta_directives(soup, intent),
        check_http_headers(site.page.headers, intent),
        check_ai_discovery_files(site.discovery, target.base_url, intent),
        check_response_stability(site.page, intent),
        check_access_control(soup, site.page, target.url, intent),
        check_content_structure(soup, intent),
    )

    score = calculate_final_score(checks)

    return ScanResult(
        url=target.url,
        mode=intent,
        score=score,
        checks=checks,
        robots_txt_found=site.robots.found,
        robots_txt_url=target.robots_txt_url,
        bots=verdicts,
        summary=build_summary(intent, score, checks),
        scanned_at=scanned_at or datetime.now(UTC),
        insights=generate_insights(checks, verdicts, intent, score),
    )


async def run_scan(
    url: str | None,
    mode: str | None,
    *,
    catalog: Sequence[CrawlerIdentity] | None = None,
    retriever: PageRetriever | None = None,
) -> ScanResult:
    """
    Scan a URL for AI crawler accessibility.

    Args:
        url: URL as entered by the user (scheme optional)
        mode: "block" or "allow"
        catalog: Crawler identities; defaults to the bundled catalog
        retriever: Retrieval layer; defaults to a PageRetriever from settings

    Returns:
        Complete ScanResult

    Raises:
        InvalidRequestError: If url/mode are missing or invalid
        ScanFailedError: On any unexpected failure (no partial result)
    """
    target = normalize_scan_input(url, mode)

    logger.info("scan_starting", url=target.url, mode=target.intent.value)

    try:
        crawlers = catalog if catalog is not None else load_crawler_catalog()
        site = await (retriever or PageRetriever()).retrieve(target.url, target.base_url)
        result = score_site(target, site, crawlers)
    except Exception as e:
        logger.error("scan_failed", url=target.url, mode=target.intent.value, exc_info=e)
        raise ScanFailedError(str(e) or "An unexpected error occurred", url=target.url) from e

    logger.info(
        "scan_complete",
        url=target.url,
        mode=target.intent.value,
        score=result.score,
        robots_txt_found=result.robots_txt_found,
        insights=len(result.insights),
    )
    return result
