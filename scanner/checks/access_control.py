"""Access control evaluator: login walls, paywalls and auth errors."""

import json

from bs4 import BeautifulSoup
from bs4.element import CData, NavigableString, Script, Stylesheet

from scanner.checks.models import CHECK_WEIGHTS, CheckResult, Intent, Recommendation
from scanner.crawler.fetcher import RetrievedPage

CHECK_ID = "paywallDetection"
CHECK_NAME = "Access Control"

AUTH_STATUS_CODES = frozenset({401, 403})

LOGIN_URL_KEYWORDS = ("login", "signin", "auth", "subscribe", "register")

PAYWALL_PHRASES = (
    "subscribe to continue",
    "sign in to read",
    "create an account",
    "members only",
    "premium content",
    "paywall",
    "subscription required",
    "log in to view",
)

PAGE_TEXT_TYPES = (NavigableString, CData, Script, Stylesheet)

PAYWALL_SCHEMA_SNIPPET = """<!-- Add to JSON-LD to signal paywall -->
<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "WebPage",
  "isAccessibleForFree": false
}
</script>"""


def _jsonld_not_free(data: object) -> bool:
    items = data if isinstance(data, list) else [data]
    for item in items:
        if isinstance(item, dict):
            value = item.get("isAccessibleForFree")
            if value is False or value == "False":
                return True
    return False


def find_access_signals(
    soup: BeautifulSoup,
    page: RetrievedPage,
    original_url: str,
) -> tuple[list[str], list[str]]:
    """
    Collect signals that content sits behind a login or paywall.

    Returns:
        Tuple of (signals, detail lines); each signal appears at most once
    """
    signals: list[str] = []
    details: list[str] = []

    if page.status_code in AUTH_STATUS_CODES:
        signals.append("auth-required")
        details.append(f"HTTP {page.status_code} — authentication required")

    if page.final_url != original_url:
        final_lower = page.final_url.lower()
        if any(keyword in final_lower for keyword in LOGIN_URL_KEYWORDS):
            signals.append("login-redirect")
            details.append(f"Redirected to login/auth page: {page.final_url}")

    # Script and style strings count too
    body_text = soup.get_text(" ", types=PAGE_TEXT_TYPES).lower()
    phrase = next((p for p in PAYWALL_PHRASES if p in body_text), None)
    if phrase:
        signals.append("paywall-text")
        details.append(f'Paywall indicator found: "{phrase}"')

    schema_flag = soup.select_one('[itemtype*="CreativeWork"] [itemprop="isAccessibleForFree"]')
    if schema_flag is not None and schema_flag.get("content") in ("false", "False"):
        signals.append("schema-paywall")
        details.append("Schema.org indicates content is not free")

    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.get_text())
        except (ValueError, RecursionError, TypeError):
            # Invalid or absurdly nested JSON-LD is common in the wild
            continue
        if _jsonld_not_free(data):
            signals.append("jsonld-paywall")
            details.append("JSON-LD indicates content is not free")
            break

    if not signals:
        details.append("No paywall or login wall detected")

    return signals, details


def check_access_control(
    soup: BeautifulSoup,
    page: RetrievedPage,
    original_url: str,
    intent: Intent,
) -> CheckResult:
    """
    Score access restrictions for the given intent.

    Args:
        soup: Parsed page body
        page: Fetched page (status and final URL are used)
        original_url: Normalized URL before redirects
        intent: Block or allow

    Returns:
        CheckResult for access control
    """
    signals, details = find_access_signals(soup, page, original_url)
    auth_required = "auth-required" in signals

    if intent == Intent.BLOCK:
        if auth_required:
            score = 100
        elif len(signals) >= 2:
            score = 80
        elif len(signals) == 1:
            score = 60
        else:
            score = 0
    else:
        if auth_required:
            score = 0
        elif len(signals) >= 2:
            score = 20
        elif len(signals) == 1:
            score = 50
        else:
            score = 100

    recommendation = None
    if intent == Intent.ALLOW and signals:
        recommendation = Recommendation(
            text="Paywalls and login walls prevent AI crawlers from accessing your content. "
            "Consider making key pages publicly accessible.",
        )
    elif intent == Intent.BLOCK and not signals:
        recommendation = Recommendation(
            text="Your content is publicly accessible. Add authentication or use schema "
            "markup to signal restricted access.",
            snippet=PAYWALL_SCHEMA_SNIPPET,
            snippet_lang="html",
        )

    if signals:
        summary = f"{len(signals)} paywall signal{'s' if len(signals) > 1 else ''} detected"
    else:
        summary = "No paywall detected"

    return CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=CHECK_WEIGHTS[intent][CHECK_ID],
        summary=summary,
        details=tuple(details),
        recommendation=recommendation,
    )
