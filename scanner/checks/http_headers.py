"""HTTP response header evaluator."""

from collections.abc import Mapping

from scanner.checks.models import CHECK_WEIGHTS, CheckResult, Intent, Recommendation

CHECK_ID = "httpHeaders"
CHECK_NAME = "HTTP Headers"

X_ROBOTS_TOKENS = ("noindex", "nofollow", "noai", "noimageai", "none")
BLOCKING_FINDINGS = frozenset({"noai", "none", "noindex", "noimageai"})

BLOCK_SNIPPET = """# Nginx
add_header X-Robots-Tag "noai, noimageai" always;

# Apache (.htaccess)
Header set X-Robots-Tag "noai, noimageai"

# Cloudflare (Transform Rules)
# Add response header: X-Robots-Tag = noai, noimageai"""

ALLOW_SNIPPET = """# Check your server config for X-Robots-Tag headers
# Remove any containing: noai, noimageai, noindex, none"""


def find_header_signals(headers: Mapping[str, str]) -> tuple[list[str], list[str]]:
    """
    Inspect crawler-relevant response headers.

    Args:
        headers: Case-insensitive response headers

    Returns:
        Tuple of (findings, detail lines)
    """
    findings: list[str] = []
    details: list[str] = []

    x_robots_tag = headers.get("x-robots-tag")
    if x_robots_tag:
        details.append(f'X-Robots-Tag: "{x_robots_tag}"')
        lower = x_robots_tag.lower()
        findings.extend(token for token in X_ROBOTS_TOKENS if token in lower)
    else:
        details.append("No X-Robots-Tag header")

    cache_control = headers.get("cache-control")
    if cache_control:
        details.append(f'Cache-Control: "{cache_control}"')
        lower = cache_control.lower()
        if "no-store" in lower or "private" in lower:
            findings.append("restrictive-cache")

    content_type = headers.get("content-type")
    if content_type:
        details.append(f'Content-Type: "{content_type}"')

    cors = headers.get("access-control-allow-origin")
    if cors:
        details.append(f'CORS: "{cors}"')
        if cors.strip() == "*":
            findings.append("open-cors")
    else:
        details.append("No CORS header (cross-origin access restricted)")

    return findings, details


def check_http_headers(headers: Mapping[str, str], intent: Intent) -> CheckResult:
    """Score response headers for the given intent."""
    findings, details = find_header_signals(headers)

    if intent == Intent.BLOCK:
        if "noai" in findings or "none" in findings:
            score = 100
        elif "noindex" in findings:
            score = 80
        elif "restrictive-cache" in findings:
            score = 40
        else:
            score = 0
    else:
        score = 0 if BLOCKING_FINDINGS.intersection(findings) else 100

    recommendation = None
    if score < 70:
        if intent == Intent.BLOCK:
            recommendation = Recommendation(
                text="Add X-Robots-Tag headers to block AI crawlers at the server level.",
                snippet=BLOCK_SNIPPET,
                snippet_lang="bash",
            )
        else:
            recommendation = Recommendation(
                text="Remove X-Robots-Tag headers that block AI crawlers.",
                snippet=ALLOW_SNIPPET,
                snippet_lang="bash",
            )

    return CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=CHECK_WEIGHTS[intent][CHECK_ID],
        summary=f"Found: {', '.join(findings)}" if findings else "No AI-specific headers",
        details=tuple(details),
        recommendation=recommendation,
    )
