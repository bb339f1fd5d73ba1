"""Content structure evaluator.

Well-structured HTML is easy for AI to parse: good for visibility, bad for
protection. The block and allow scores are exact complements.
"""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from scanner.checks.models import CHECK_WEIGHTS, CheckResult, Intent, Recommendation, round_score

CHECK_ID = "contentStructure"
CHECK_NAME = "Page Structure"

MAX_POINTS = 7
MIN_DESCRIPTION_LENGTH = 20

STRUCTURE_SNIPPET = """<!-- Example structured data -->
<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "WebPage",
  "name": "Your Page Title",
  "description": "Your page description"
}
</script>

<!-- Meta description -->
<meta name="description" content="Your page description here">

<!-- Open Graph -->
<meta property="og:title" content="Your Page Title">
<meta property="og:description" content="Your page description">"""


@dataclass
class StructureSignals:
    """Quality points and what was missing."""

    points: float = 0.0
    details: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def quality_score(self) -> int:
        return round_score(100 * self.points / MAX_POINTS)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def analyze_structure(soup: BeautifulSoup) -> StructureSignals:
    """Award up to seven quality points for machine-readable structure."""
    signals = StructureSignals()
    details = signals.details

    # 1. Semantic wrapper
    has_article = soup.find("article") is not None
    has_main = soup.find("main") is not None
    if has_article or has_main:
        signals.points += 1
        found = " ".join(t for t, ok in (("<article>", has_article), ("<main>", has_main)) if ok)
        details.append(f"✓ Semantic containers: {found}")
    else:
        details.append("✗ No <article> or <main> tags found")
        signals.missing.append("<main> or <article> wrapper")

    # 2. Heading hierarchy; a lone h1 earns half a point
    h1_count = len(soup.find_all("h1"))
    h2_count = len(soup.find_all("h2"))
    if h1_count == 1 and h2_count > 0:
        signals.points += 1
        details.append(f"✓ Good heading structure: 1 <h1>, {h2_count} <h2>")
    elif h1_count >= 1:
        signals.points += 0.5
        details.append(f"⚠ {h1_count} <h1> tag{'s' if h1_count > 1 else ''}, {h2_count} <h2> tags")
    else:
        details.append("✗ No <h1> tag found")
    if h1_count != 1:
        signals.missing.append("single <h1> tag")

    # 3. Structured data
    json_ld = len(soup.find_all("script", attrs={"type": "application/ld+json"}))
    microdata = len(soup.find_all(attrs={"itemscope": True}))
    if json_ld or microdata:
        signals.points += 1
        parts = []
        if json_ld:
            parts.append(_plural(json_ld, "JSON-LD block"))
        if microdata:
            parts.append(_plural(microdata, "microdata element"))
        details.append(f"✓ Structured data: {' '.join(parts)}")
    else:
        details.append("✗ No structured data (JSON-LD or microdata)")
        signals.missing.append("structured data (JSON-LD)")

    # 4. Meta description
    description_tag = soup.find("meta", attrs={"name": "description"})
    description = str(description_tag.get("content", "")) if description_tag else ""
    if len(description) > MIN_DESCRIPTION_LENGTH:
        signals.points += 1
        details.append("✓ Meta description present")
    else:
        details.append("✗ No meta description or too short")
        signals.missing.append("meta description")

    # 5. Open Graph pair
    og_title = soup.find("meta", attrs={"property": "og:title"}) is not None
    og_description = soup.find("meta", attrs={"property": "og:description"}) is not None
    if og_title and og_description:
        signals.points += 1
        details.append("✓ Open Graph tags present")
    else:
        details.append("✗ Missing Open Graph tags")
        signals.missing.append("Open Graph tags")

    # 6. Language
    html_tag = soup.find("html")
    lang = html_tag.get("lang") if html_tag else None
    if lang:
        signals.points += 1
        details.append(f"✓ Language declared: {lang}")
    else:
        details.append("✗ No lang attribute on <html>")

    # 7. Page chrome
    has_nav = soup.find("nav") is not None
    has_footer = soup.find("footer") is not None
    if has_nav and has_footer:
        signals.points += 1
        details.append("✓ Good page structure (<nav> and <footer> present)")
    else:
        details.append(
            f"⚠ Page structure: {'<nav> found' if has_nav else 'no <nav>'}, "
            f"{'<footer> found' if has_footer else 'no <footer>'}"
        )

    return signals


def check_content_structure(soup: BeautifulSoup, intent: Intent) -> CheckResult:
    """Score page structure for the given intent."""
    signals = analyze_structure(soup)
    quality = signals.quality_score

    score = 100 - quality if intent == Intent.BLOCK else quality

    recommendation = None
    if intent == Intent.ALLOW and signals.missing:
        recommendation = Recommendation(
            text=f"Add {', '.join(signals.missing[:3])} to improve AI readability.",
            snippet=STRUCTURE_SNIPPET,
            snippet_lang="html",
        )

    return CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=CHECK_WEIGHTS[intent][CHECK_ID],
        summary=f"{round_score(signals.points)}/{MAX_POINTS} quality signals",
        details=tuple(signals.details),
        recommendation=recommendation,
    )
