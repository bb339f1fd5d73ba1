"""Tests for score aggregation, summaries and insights."""

from scanner.checks.models import CHECK_ORDER, CHECK_WEIGHTS, CheckResult, CrawlerVerdict, InsightType, Intent
from scanner.crawler.catalog import CrawlerIdentity, RobotsCompliance
from scanner.scoring.aggregate import (
    MAX_INSIGHTS,
    build_summary,
    calculate_final_score,
    count_statuses,
    generate_insights,
)


def checks(intent: Intent, **scores: int) -> tuple[CheckResult, ...]:
    """Seven checks; unspecified scores default to 100."""
    return tuple(
        CheckResult(
            id=check_id,
            name=check_id,
            score=scores.get(check_id, 100),
            weight=CHECK_WEIGHTS[intent][check_id],
            summary="",
        )
        for check_id in CHECK_ORDER
    )


def verdicts(**allowed: bool) -> tuple[CrawlerVerdict, ...]:
    return tuple(
        CrawlerVerdict(
            crawler=CrawlerIdentity(name, name, "Op", "Purpose", RobotsCompliance.compliant()),
            allowed=is_allowed,
        )
        for name, is_allowed in allowed.items()
    )


class TestCalculateFinalScore:
    """Tests for the weighted mean."""

    def test_all_perfect(self) -> None:
        assert calculate_final_score(checks(Intent.BLOCK)) == 100

    def test_weighted(self) -> None:
        # Only robots.txt (35) fails under block intent
        assert calculate_final_score(checks(Intent.BLOCK, robotsTxt=0)) == 65
        # 30 * 50 / 100 = 15 lost under allow intent
        assert calculate_final_score(checks(Intent.ALLOW, robotsTxt=50)) == 85

    def test_rounds_half_up(self) -> None:
        # 5 * 10 / 100 = 0.5 lost -> 99.5 -> 100
        assert calculate_final_score(checks(Intent.BLOCK, aiDiscoveryFiles=90)) == 100

    def test_empty(self) -> None:
        assert calculate_final_score(()) == 0


class TestSummary:
    """Tests for counts and narrative summaries."""

    def test_count_statuses(self) -> None:
        counts = count_statuses(checks(Intent.ALLOW, robotsTxt=0, metaDirectives=50))
        assert (counts.passed, counts.warned, counts.failed) == (5, 1, 1)

    def test_block_bands(self) -> None:
        assert build_summary(Intent.BLOCK, 85, checks(Intent.BLOCK)).startswith("Strong AI protection. 7 of 7")
        assert build_summary(Intent.BLOCK, 60, checks(Intent.BLOCK, robotsTxt=0)).startswith(
            "Moderate protection."
        )
        assert build_summary(Intent.BLOCK, 20, checks(Intent.BLOCK, robotsTxt=0)).endswith(
            "1 of 7 checks are failing."
        )

    def test_allow_bands(self) -> None:
        assert build_summary(Intent.ALLOW, 80, checks(Intent.ALLOW)).startswith("Excellent AI visibility.")
        moderate = build_summary(Intent.ALLOW, 50, checks(Intent.ALLOW, robotsTxt=0))
        assert moderate.endswith("1 check need attention.")
        assert build_summary(Intent.ALLOW, 49, checks(Intent.ALLOW)).startswith("Poor AI visibility.")


class TestGenerateInsights:
    """Tests for insight rules."""

    def test_allow_good_and_major_blocked(self) -> None:
        insights = generate_insights(
            checks(Intent.ALLOW),
            verdicts(GPTBot=False, ClaudeBot=True, Other=True),
            Intent.ALLOW,
            90,
        )
        assert insights[0].type == InsightType.GOOD
        assert "2/3 crawlers" in insights[0].text
        assert insights[1].type == InsightType.WARNING
        assert insights[1].text.startswith("Major AI crawlers blocked: GPTBot.")

    def test_allow_majority_good_news(self) -> None:
        insights = generate_insights(
            checks(Intent.ALLOW, aiDiscoveryFiles=0),
            verdicts(A=True, B=True, C=False),
            Intent.ALLOW,
            60,
        )
        assert insights[0].text == "Most AI crawlers (2/3) can access your content."
        assert insights[1].type == InsightType.TIP
        assert "llms.txt" in insights[1].text

    def test_allow_robots_fine_but_score_low(self) -> None:
        insights = generate_insights(
            checks(Intent.ALLOW, robotsTxt=100, responseStability=0),
            verdicts(A=False, B=False),
            Intent.ALLOW,
            60,
        )
        assert [i.type for i in insights] == [InsightType.TIP]
        assert insights[0].text.startswith("robots.txt looks good")

    def test_block_insights(self) -> None:
        insights = generate_insights(
            checks(Intent.BLOCK, metaDirectives=0),
            verdicts(CCBot=True, Other=False),
            Intent.BLOCK,
            30,
        )
        assert [i.type for i in insights] == [InsightType.WARNING, InsightType.TIP, InsightType.TIP]
        assert insights[0].text == "Still exposed: CCBot can access your content."
        assert "noai and noimageai" in insights[2].text

    def test_block_strong(self) -> None:
        insights = generate_insights(checks(Intent.BLOCK), verdicts(A=False, B=False), Intent.BLOCK, 95)
        assert [i.text for i in insights] == ["Strong protection. 2/2 AI crawlers are blocked."]

    def test_capped_at_four(self) -> None:
        insights = generate_insights(
            checks(Intent.ALLOW, aiDiscoveryFiles=0, contentStructure=0),
            verdicts(GPTBot=False, ClaudeBot=True, PerplexityBot=True),
            Intent.ALLOW,
            79,
        )
        assert len(insights) == MAX_INSIGHTS
        order = [i.type for i in insights]
        assert order == sorted(order, key=[InsightType.GOOD, InsightType.WARNING, InsightType.TIP].index)
