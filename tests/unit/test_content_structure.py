"""Tests for the content structure evaluator."""

from bs4 import BeautifulSoup

from scanner.checks.content_structure import analyze_structure, check_content_structure
from scanner.checks.models import Intent

RICH_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta name="description" content="A thorough guide to structured pages">
  <meta property="og:title" content="Guide">
  <meta property="og:description" content="A guide">
  <script type="application/ld+json">{"@type": "Article"}</script>
</head>
<body>
  <nav><a href="/">Home</a></nav>
  <main><article>
    <h1>Guide</h1>
    <h2>Part one</h2>
    <h2>Part two</h2>
  </article></main>
  <footer>Footer</footer>
</body>
</html>"""


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestAnalyzeStructure:
    """Tests for quality point counting."""

    def test_rich_page_scores_all_points(self) -> None:
        signals = analyze_structure(soup(RICH_PAGE))
        assert signals.points == 7
        assert signals.quality_score == 100
        assert signals.missing == []
        assert all(d.startswith("✓") for d in signals.details)

    def test_empty_page(self) -> None:
        signals = analyze_structure(soup("<html><body></body></html>"))
        assert signals.points == 0
        assert signals.quality_score == 0
        assert signals.missing == [
            "<main> or <article> wrapper",
            "single <h1> tag",
            "structured data (JSON-LD)",
            "meta description",
            "Open Graph tags",
        ]

    def test_lone_h1_earns_half_point(self) -> None:
        signals = analyze_structure(soup("<html><body><h1>Title</h1></body></html>"))
        assert signals.points == 0.5
        assert signals.quality_score == 7
        assert "single <h1> tag" not in signals.missing

    def test_multiple_h1(self) -> None:
        signals = analyze_structure(soup("<html><body><h1>a</h1><h1>b</h1><h2>c</h2></body></html>"))
        assert signals.points == 0.5
        assert "single <h1> tag" in signals.missing
        assert "⚠ 2 <h1> tags, 1 <h2> tags" in signals.details

    def test_short_description_ignored(self) -> None:
        signals = analyze_structure(soup('<html><head><meta name="description" content="short"></head></html>'))
        assert "meta description" in signals.missing

    def test_microdata_counts_as_structured_data(self) -> None:
        signals = analyze_structure(soup('<html><body><div itemscope itemtype="x"></div></body></html>'))
        assert "✓ Structured data: 1 microdata element" in signals.details


class TestCheckContentStructure:
    """Tests for scoring."""

    def test_scores_are_complements(self) -> None:
        for html in (RICH_PAGE, "<html></html>", "<html lang='en'><body><main><h1>x</h1></main></body></html>"):
            parsed = soup(html)
            block = check_content_structure(parsed, Intent.BLOCK)
            allow = check_content_structure(parsed, Intent.ALLOW)
            assert block.score + allow.score == 100

    def test_summary(self) -> None:
        assert check_content_structure(soup(RICH_PAGE), Intent.ALLOW).summary == "7/7 quality signals"
        lone_h1 = soup("<html><body><h1>Title</h1></body></html>")
        assert check_content_structure(lone_h1, Intent.ALLOW).summary == "1/7 quality signals"

    def test_allow_recommendation_lists_three_missing(self) -> None:
        check = check_content_structure(soup("<html></html>"), Intent.ALLOW)
        assert check.recommendation.text == (
            "Add <main> or <article> wrapper, single <h1> tag, structured data (JSON-LD) "
            "to improve AI readability."
        )

    def test_no_recommendation_for_block(self) -> None:
        assert check_content_structure(soup("<html></html>"), Intent.BLOCK).recommendation is None

    def test_weight(self) -> None:
        assert check_content_structure(soup(RICH_PAGE), Intent.BLOCK).weight == 10
        assert check_content_structure(soup(RICH_PAGE), Intent.ALLOW).weight == 10
