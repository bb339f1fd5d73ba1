"""Data models shared by the scan evaluators and the aggregator."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from scanner.crawler.catalog import CrawlerIdentity


class Intent(StrEnum):
    """What the site owner wants from AI crawlers."""

    BLOCK = "block"  # Maximize protection
    ALLOW = "allow"  # Maximize discoverability


class CheckStatus(StrEnum):
    """Traffic-light status derived from a check score."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class InsightType(StrEnum):
    GOOD = "good"
    WARNING = "warning"
    TIP = "tip"


# Check ids in the order they are reported
CHECK_ORDER: tuple[str, ...] = (
    "robotsTxt",
    "metaDirectives",
    "httpHeaders",
    "aiDiscoveryFiles",
    "responseStability",
    "paywallDetection",
    "contentStructure",
)

# Public and transparent: these are shown to the user. Each column sums to 100.
CHECK_WEIGHTS: dict[Intent, dict[str, int]] = {
    Intent.BLOCK: {
        "robotsTxt": 35,
        "metaDirectives": 20,
        "httpHeaders": 15,
        "aiDiscoveryFiles": 5,
        "responseStability": 5,
        "paywallDetection": 10,
        "contentStructure": 10,
    },
    Intent.ALLOW: {
        "robotsTxt": 30,
        "metaDirectives": 15,
        "httpHeaders": 10,
        "aiDiscoveryFiles": 10,
        "responseStability": 15,
        "paywallDetection": 10,
        "contentStructure": 10,
    },
}

PASS_THRESHOLD = 70
WARN_THRESHOLD = 40


def round_score(value: float) -> int:
    """Round half up, so 12.5 becomes 13 rather than banker's 12."""
    return int(math.floor(value + 0.5))


def status_for(score: int) -> CheckStatus:
    """Get the status for a 0-100 score."""
    if score >= PASS_THRESHOLD:
        return CheckStatus.PASS
    if score >= WARN_THRESHOLD:
        return CheckStatus.WARN
    return CheckStatus.FAIL


@dataclass(frozen=True)
class Recommendation:
    """How to fix a check, with an optional copyable snippet."""

    text: str
    snippet: str | None = None
    snippet_lang: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"text": self.text}
        if self.snippet is not None:
            result["snippet"] = self.snippet
        if self.snippet_lang is not None:
            result["snippetLang"] = self.snippet_lang
        return result


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one evaluator."""

    id: str
    name: str
    score: int
    weight: int
    summary: str
    details: tuple[str, ...] = ()
    recommendation: Recommendation | None = None
    status: CheckStatus = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.score, int) or not 0 <= self.score <= 100:
            raise ValueError(f"Check score must be an integer in [0, 100], got {self.score!r}")
        object.__setattr__(self, "details", tuple(self.details))
        object.__setattr__(self, "status", status_for(self.score))

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "weight": self.weight,
            "status": self.status.value,
            "summary": self.summary,
            "details": list(self.details),
        }
        if self.recommendation is not None:
            result["recommendation"] = self.recommendation.to_dict()
        return result


@dataclass(frozen=True)
class CrawlerVerdict:
    """Whether robots.txt lets a known crawler reach the scanned URL."""

    crawler: CrawlerIdentity
    allowed: bool

    @property
    def name(self) -> str:
        return self.crawler.name

    @property
    def user_agent(self) -> str:
        return self.crawler.user_agent

    def to_dict(self) -> dict:
        return {**self.crawler.to_dict(), "allowed": self.allowed}


@dataclass(frozen=True)
class Insight:
    """A short narrative takeaway."""

    type: InsightType
    text: str

    def to_dict(self) -> dict:
        return {"type": self.type.value, "text": self.text}


@dataclass(frozen=True)
class ScanResult:
    """Everything a scan returns to the caller."""

    url: str
    mode: Intent
    score: int
    checks: tuple[CheckResult, ...]
    robots_txt_found: bool
    robots_txt_url: str
    bots: tuple[CrawlerVerdict, ...]
    summary: str
    scanned_at: datetime
    insights: tuple[Insight, ...] = ()

    def get_check(self, check_id: str) -> CheckResult | None:
        return next((c for c in self.checks if c.id == check_id), None)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "mode": self.mode.value,
            "score": self.score,
            "checks": [c.to_dict() for c in self.checks],
            "robotsTxtFound": self.robots_txt_found,
            "robotsTxtUrl": self.robots_txt_url,
            "bots": [b.to_dict() for b in self.bots],
            "summary": self.summary,
            "scannedAt": self.scanned_at.isoformat().replace("+00:00", "Z"),
            "insights": [i.to_dict() for i in self.insights],
        }
