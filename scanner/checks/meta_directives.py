"""Meta directive evaluator (robots meta tag and AI opt-out tags)."""

from bs4 import BeautifulSoup

from scanner.checks.models import CHECK_WEIGHTS, CheckResult, Intent, Recommendation

CHECK_ID = "metaDirectives"
CHECK_NAME = "Meta Directives"

ROBOTS_DIRECTIVES = ("noindex", "nofollow", "none", "nosnippet", "noarchive")

# Directives that shut AI out entirely
BLOCKING_DIRECTIVES = frozenset({"noai", "none", "noindex"})

BLOCK_SNIPPET = (
    "<!-- Add inside <head> -->\n"
    '<meta name="robots" content="noai, noimageai">\n'
    '<meta name="robots" content="noindex, nofollow">'
)
ALLOW_SNIPPET = (
    "<!-- Ensure your robots meta allows indexing -->\n"
    '<meta name="robots" content="index, follow">'
)


def _meta_contents(soup: BeautifulSoup, name: str) -> list[str]:
    """Lower-cased content of every <meta name=...> tag (name matched case-insensitively)."""
    contents = []
    for tag in soup.find_all("meta", attrs={"name": True}):
        if str(tag.get("name", "")).strip().lower() == name:
            contents.append(str(tag.get("content", "")).lower())
    return contents


def find_meta_directives(soup: BeautifulSoup) -> tuple[list[str], list[str]]:
    """
    Collect AI-relevant directives from meta tags.

    Returns:
        Tuple of (directives found, detail lines)
    """
    found: list[str] = []
    details: list[str] = []

    robots_tag = next(
        (t for t in soup.find_all("meta", attrs={"name": True}) if str(t["name"]).lower() == "robots"),
        None,
    )
    robots_content = str(robots_tag.get("content", "")) if robots_tag else ""
    if robots_content:
        details.append(f'robots meta: "{robots_content}"')
        directives = [d.strip() for d in robots_content.lower().split(",")]
        found.extend(d for d in ROBOTS_DIRECTIVES if d in directives)

    robots_metas = _meta_contents(soup, "robots")

    if any("noai" in c for c in robots_metas) or _meta_contents(soup, "noai"):
        found.append("noai")
        details.append("noai directive found")

    if any("noimageai" in c for c in robots_metas) or _meta_contents(soup, "noimageai"):
        found.append("noimageai")
        details.append("noimageai directive found")

    if any("noai" in c for c in _meta_contents(soup, "googlebot")) or any(
        "nositelinkssearchbox" in c for c in _meta_contents(soup, "google")
    ):
        found.append("google-noai")
        details.append("Google-specific AI directive found")

    if not found:
        details.append("No AI-blocking meta directives found")

    return found, details


def check_meta_directives(soup: BeautifulSoup, intent: Intent) -> CheckResult:
    """Score meta directives for the given intent."""
    found, details = find_meta_directives(soup)
    blocking = BLOCKING_DIRECTIVES.intersection(found)

    if intent == Intent.BLOCK:
        if "noai" in found or "none" in found:
            score = 100
        elif "noindex" in found:
            score = 70
        elif found:
            score = 50
        else:
            score = 0
    else:
        if not found:
            score = 100
        elif blocking:
            score = 0
        else:
            score = 50

    recommendation = None
    if score < 70:
        if intent == Intent.BLOCK:
            recommendation = Recommendation(
                text="Add meta directives to block AI from indexing this page.",
                snippet=BLOCK_SNIPPET,
                snippet_lang="html",
            )
        else:
            recommendation = Recommendation(
                text="Remove AI-blocking meta directives so crawlers can index your content.",
                snippet=ALLOW_SNIPPET,
                snippet_lang="html",
            )

    return CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=CHECK_WEIGHTS[intent][CHECK_ID],
        summary=f"Found: {', '.join(found)}" if found else "No AI-blocking directives",
        details=tuple(details),
        recommendation=recommendation,
    )
