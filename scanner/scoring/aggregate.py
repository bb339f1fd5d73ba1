"""Combine the seven check scores into one score, a summary and insights.

The final score is a weighted mean of check scores. Weights are public
(see CHECK_WEIGHTS) and sum to 100 for either intent, but the mean divides
by the actual total so a custom weight table still yields 0-100.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from scanner.checks.models import (
    CheckResult,
    CheckStatus,
    CrawlerVerdict,
    Insight,
    InsightType,
    Intent,
    round_score,
)

MAX_INSIGHTS = 4

STRONG_SCORE = 80
MODERATE_SCORE = 50
WEAK_CHECK_SCORE = 50

# High-traffic crawlers worth calling out by name
MAJOR_CRAWLERS_ALLOW = ("GPTBot", "ClaudeBot", "Google-Extended", "PerplexityBot")
MAJOR_CRAWLERS_BLOCK = ("GPTBot", "ClaudeBot", "Google-Extended", "PerplexityBot", "CCBot")


@dataclass(frozen=True)
class StatusCounts:
    passed: int = 0
    warned: int = 0
    failed: int = 0


def calculate_final_score(checks: Sequence[CheckResult]) -> int:
    """Weighted mean of check scores, rounded half up."""
    total_weight = sum(c.weight for c in checks)
    if total_weight <= 0:
        return 0
    weighted = sum(c.score * c.weight for c in checks) / total_weight
    return max(0, min(100, round_score(weighted)))


def count_statuses(checks: Sequence[CheckResult]) -> StatusCounts:
    return StatusCounts(
        passed=sum(1 for c in checks if c.status == CheckStatus.PASS),
        warned=sum(1 for c in checks if c.status == CheckStatus.WARN),
        failed=sum(1 for c in checks if c.status == CheckStatus.FAIL),
    )


def build_summary(intent: Intent, score: int, checks: Sequence[CheckResult]) -> str:
    """Pick the narrative summary for a final score."""
    counts = count_statuses(checks)
    total = len(checks)
    need = f"{counts.failed} check{'s' if counts.failed != 1 else ''} need attention."

    if intent == Intent.BLOCK:
        if score >= STRONG_SCORE:
            return (
                f"Strong AI protection. {counts.passed} of {total} checks indicate "
                "effective blocking."
            )
        if score >= MODERATE_SCORE:
            return f"Moderate protection. Some AI crawlers may still access your content. {need}"
        return (
            "Weak AI protection. Most crawlers can freely access your content. "
            f"{counts.failed} of {total} checks are failing."
        )

    if score >= STRONG_SCORE:
        return (
            f"Excellent AI visibility. {counts.passed} of {total} checks confirm your "
            "content is accessible to AI systems."
        )
    if score >= MODERATE_SCORE:
        return (
            "Moderate visibility. Some issues may prevent AI from fully accessing "
            f"your content. {need}"
        )
    return (
        "Poor AI visibility. Your site is largely invisible to AI systems. "
        f"{counts.failed} of {total} checks are failing."
    )


def _check_score(checks: Sequence[CheckResult], check_id: str) -> int | None:
    return next((c.score for c in checks if c.id == check_id), None)


def _allow_insights(
    checks: Sequence[CheckResult], verdicts: Sequence[CrawlerVerdict], score: int
) -> list[Insight]:
    insights: list[Insight] = []
    total = len(verdicts)
    allowed = sum(1 for v in verdicts if v.allowed)

    if score >= STRONG_SCORE:
        insights.append(
            Insight(
                InsightType.GOOD,
                f"Your site is well-configured for AI visibility. {allowed}/{total} "
                "crawlers can reach your content.",
            )
        )
    elif allowed > total * 0.5:
        insights.append(
            Insight(InsightType.GOOD, f"Most AI crawlers ({allowed}/{total}) can access your content.")
        )

    major_blocked = [v.name for v in verdicts if not v.allowed and v.name in MAJOR_CRAWLERS_ALLOW]
    if major_blocked:
        insights.append(
            Insight(
                InsightType.WARNING,
                f"Major AI crawlers blocked: {', '.join(major_blocked)}. "
                "These are high-traffic AI systems.",
            )
        )

    discovery = _check_score(checks, "aiDiscoveryFiles")
    if discovery is not None and discovery < WEAK_CHECK_SCORE:
        insights.append(
            Insight(
                InsightType.TIP,
                "Add an llms.txt file to help AI systems understand your site's content "
                "and structure.",
            )
        )

    structure = _check_score(checks, "contentStructure")
    if structure is not None and structure < WEAK_CHECK_SCORE:
        insights.append(
            Insight(
                InsightType.TIP,
                "Improve your HTML structure (headings, meta tags, structured data) so AI "
                "can better parse your content.",
            )
        )

    if _check_score(checks, "robotsTxt") == 100 and score < STRONG_SCORE:
        insights.append(
            Insight(
                InsightType.TIP,
                "robots.txt looks good, but other factors are limiting visibility. "
                "Check the details below.",
            )
        )

    return insights


def _block_insights(
    checks: Sequence[CheckResult], verdicts: Sequence[CrawlerVerdict], score: int
) -> list[Insight]:
    insights: list[Insight] = []
    total = len(verdicts)
    blocked = sum(1 for v in verdicts if not v.allowed)

    if score >= STRONG_SCORE:
        insights.append(
            Insight(InsightType.GOOD, f"Strong protection. {blocked}/{total} AI crawlers are blocked.")
        )

    major_allowed = [v.name for v in verdicts if v.allowed and v.name in MAJOR_CRAWLERS_BLOCK]
    if major_allowed:
        insights.append(
            Insight(
                InsightType.WARNING,
                f"Still exposed: {', '.join(major_allowed)} can access your content.",
            )
        )

    if score < MODERATE_SCORE:
        insights.append(
            Insight(
                InsightType.TIP,
                "Your content is largely unprotected. Start with robots.txt — it's the "
                "most impactful and easiest fix.",
            )
        )

    meta = _check_score(checks, "metaDirectives")
    if meta is not None and meta < WEAK_CHECK_SCORE:
        insights.append(
            Insight(
                InsightType.TIP,
                "Add noai and noimageai meta tags for an extra layer of protection beyond "
                "robots.txt.",
            )
        )

    return insights


def generate_insights(
    checks: Sequence[CheckResult],
    verdicts: Sequence[CrawlerVerdict],
    intent: Intent,
    score: int,
) -> tuple[Insight, ...]:
    """
    Rule-based takeaways, good news first, then warnings, then tips.

    Args:
        checks: The seven check results
        verdicts: Per-crawler robots.txt verdicts
        intent: Block or allow
        score: Final weighted score

    Returns:
        At most MAX_INSIGHTS insights in generation order
    """
    if intent == Intent.ALLOW:
        insights = _allow_insights(checks, verdicts, score)
    else:
        insights = _block_insights(checks, verdicts, score)
    return tuple(insights[:MAX_INSIGHTS])
