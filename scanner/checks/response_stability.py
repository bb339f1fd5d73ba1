"""Response speed and availability evaluator.

Fast, successful responses are what a crawler wants, so they score well
for visibility and badly for protection. An unreachable page is the
opposite: a dead end for crawlers, a win for a blocker.
"""

from scanner.checks.models import CHECK_WEIGHTS, CheckResult, Intent, Recommendation
from scanner.crawler.fetcher import RetrievedPage

CHECK_ID = "responseStability"
CHECK_NAME = "Response Speed"

# (upper bound in ms, score); anything slower scores LATENCY_FLOOR
LATENCY_BUCKETS: tuple[tuple[int, int], ...] = (
    (500, 100),
    (1500, 80),
    (3000, 50),
    (5000, 30),
)
LATENCY_FLOOR = 10

FAST_MS = 500
MODERATE_MS = 2000


def latency_score(latency_ms: int) -> int:
    """Map response latency to a 10-100 score."""
    for limit, score in LATENCY_BUCKETS:
        if latency_ms < limit:
            return score
    return LATENCY_FLOOR


def check_response_stability(page: RetrievedPage, intent: Intent) -> CheckResult:
    """Score page availability and latency for the given intent."""
    weight = CHECK_WEIGHTS[intent][CHECK_ID]

    if page.error:
        recommendation = None
        if intent == Intent.ALLOW:
            recommendation = Recommendation(
                text="Your site is unreachable. Crawlers can't access content they can't load.",
                snippet=f"# Check your server is running and responding\ncurl -I {page.url}",
                snippet_lang="bash",
            )
        return CheckResult(
            id=CHECK_ID,
            name=CHECK_NAME,
            score=80 if intent == Intent.BLOCK else 0,
            weight=weight,
            summary="Site unreachable",
            details=(f"Fetch error: {page.error}",),
            recommendation=recommendation,
        )

    latency_ms = page.latency_ms
    details = (f"HTTP status: {page.status_code}", f"Latency: {latency_ms}ms")

    speed = latency_score(latency_ms)
    status_ok = 200 <= page.status_code < 400

    if intent == Intent.BLOCK:
        score = 100 - speed if status_ok else 70
    else:
        score = speed if status_ok else 20

    if not status_ok:
        summary = f"HTTP {page.status_code} — non-success response"
    elif latency_ms < FAST_MS:
        summary = f"Fast response ({latency_ms}ms)"
    elif latency_ms < MODERATE_MS:
        summary = f"Moderate response ({latency_ms}ms)"
    else:
        summary = f"Slow response ({latency_ms}ms)"

    recommendation = None
    if intent == Intent.ALLOW and latency_ms > MODERATE_MS:
        recommendation = Recommendation(
            text="Slow pages cause crawlers to time out or skip your content. "
            "Improve server response time.",
        )

    return CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=weight,
        summary=summary,
        details=details,
        recommendation=recommendation,
    )
