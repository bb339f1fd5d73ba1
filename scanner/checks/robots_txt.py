"""robots.txt evaluator.

Decides, for every crawler in the catalog, whether robots.txt lets it
reach the scanned URL, and scores the share of crawlers that behave the
way the site owner wants.
"""

from collections.abc import Sequence

import structlog

from scanner.checks.models import (
    CHECK_WEIGHTS,
    CheckResult,
    CrawlerVerdict,
    Intent,
    Recommendation,
    round_score,
)
from scanner.crawler.catalog import CrawlerIdentity
from scanner.crawler.fetcher import RetrievedRobotsFile
from scanner.crawler.robots import RobotsParser

logger = structlog.get_logger(__name__)

CHECK_ID = "robotsTxt"
CHECK_NAME = "robots.txt"

# How many crawler names the detail line spells out
MAX_NAMED_CRAWLERS = 5


def evaluate_crawlers(
    robots: RetrievedRobotsFile,
    target_url: str,
    catalog: Sequence[CrawlerIdentity],
) -> tuple[CrawlerVerdict, ...]:
    """Decide allowed/blocked for each crawler. No robots.txt means everyone is allowed."""
    if not robots.found:
        return tuple(CrawlerVerdict(crawler=c, allowed=True) for c in catalog)

    parser = RobotsParser.parse(robots.content)
    return tuple(
        CrawlerVerdict(crawler=c, allowed=parser.is_allowed(target_url, c.user_agent))
        for c in catalog
    )


def _named_list(names: list[str]) -> str:
    text = ", ".join(names[:MAX_NAMED_CRAWLERS])
    if len(names) > MAX_NAMED_CRAWLERS:
        text += f" (+{len(names) - MAX_NAMED_CRAWLERS} more)"
    return text


def _robots_snippet(header: str, user_agents: list[str], directive: str) -> str:
    stanzas = "\n".join(f"User-agent: {ua}\n{directive}: /\n" for ua in user_agents)
    return f"{header}\n{stanzas}"


def check_robots_txt(
    robots: RetrievedRobotsFile,
    target_url: str,
    catalog: Sequence[CrawlerIdentity],
    intent: Intent,
) -> tuple[CheckResult, tuple[CrawlerVerdict, ...]]:
    """
    Score robots.txt against the crawler catalog.

    Args:
        robots: Fetched robots.txt
        target_url: Normalized URL being scanned
        catalog: Known AI crawlers
        intent: Block or allow

    Returns:
        Tuple of (CheckResult, per-crawler verdicts)
    """
    verdicts = evaluate_crawlers(robots, target_url, catalog)

    total = len(verdicts)
    allowed_names = [v.name for v in verdicts if v.allowed]
    blocked_names = [v.name for v in verdicts if not v.allowed]
    allowed = len(allowed_names)
    blocked = len(blocked_names)

    details: list[str] = []
    recommendation: Recommendation | None = None

    if intent == Intent.BLOCK:
        score = round_score(100 * blocked / total) if total else 0
        if not robots.found:
            details.append("No robots.txt found — all bots have unrestricted access")
            score = 0
        else:
            details.append(f"{blocked} of {total} AI crawlers blocked")
            if allowed:
                details.append(f"Still allowed: {_named_list(allowed_names)}")

        still_allowed = [v.user_agent for v in verdicts if v.allowed]
        if score < 100 and still_allowed:
            text = (
                "Create a robots.txt file to block AI crawlers."
                if not robots.found
                else f"Add these {len(still_allowed)} bots to your robots.txt to block them."
            )
            recommendation = Recommendation(
                text=text,
                snippet=_robots_snippet("# Add to your robots.txt", still_allowed, "Disallow"),
                snippet_lang="txt",
            )
    else:
        score = round_score(100 * allowed / total) if total else 0
        if not robots.found:
            details.append("No robots.txt found — all bots can access by default")
            score = 100
        else:
            details.append(f"{allowed} of {total} AI crawlers can access your site")
            if blocked:
                details.append(f"Blocked: {_named_list(blocked_names)}")

        blocked_agents = [v.user_agent for v in verdicts if not v.allowed]
        if score < 100 and blocked_agents:
            recommendation = Recommendation(
                text=f"Remove or allow these {len(blocked_agents)} bots in your robots.txt.",
                snippet=_robots_snippet("# Allow AI crawlers in robots.txt", blocked_agents, "Allow"),
                snippet_lang="txt",
            )

    logger.debug(
        "robots_txt_evaluated",
        robots_txt_found=robots.found,
        allowed=allowed,
        blocked=blocked,
        score=score,
    )

    check = CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=CHECK_WEIGHTS[intent][CHECK_ID],
        summary=f"{blocked}/{total} bots blocked" if robots.found else "No robots.txt found",
        details=tuple(details),
        recommendation=recommendation,
    )
    return check, verdicts
