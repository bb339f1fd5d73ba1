"""Catalog of known AI crawler identities.

The catalog is data, not code: it lives in ``data/crawlers.yaml`` and is
loaded once per process into an immutable tuple. Each entry records the
crawler's user-agent token, operator, stated purpose and whether the
operator says it honours robots.txt.
"""

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from pathlib import Path

import structlog
import yaml

from api.config import get_settings

logger = structlog.get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "crawlers.yaml"


class ComplianceKind(StrEnum):
    """How a crawler's operator describes its robots.txt behaviour."""

    COMPLIANT = "compliant"
    NON_COMPLIANT = "non_compliant"
    CAVEAT = "caveat"


@dataclass(frozen=True)
class RobotsCompliance:
    """Stated robots.txt compliance: yes, no, or yes-with-a-caveat."""

    kind: ComplianceKind
    caveat: str | None = None

    @classmethod
    def compliant(cls) -> "RobotsCompliance":
        return cls(ComplianceKind.COMPLIANT)

    @classmethod
    def non_compliant(cls) -> "RobotsCompliance":
        return cls(ComplianceKind.NON_COMPLIANT)

    @classmethod
    def with_caveat(cls, text: str) -> "RobotsCompliance":
        return cls(ComplianceKind.CAVEAT, text)

    @classmethod
    def from_value(cls, value: bool | str) -> "RobotsCompliance":
        """Build from the catalog's ``respectsRobots`` field (bool or caveat text)."""
        if isinstance(value, bool):
            return cls.compliant() if value else cls.non_compliant()
        if isinstance(value, str) and value.strip():
            return cls.with_caveat(value.strip())
        raise ValueError(f"respectsRobots must be a boolean or text, got {value!r}")

    def to_value(self) -> bool | str:
        """Wire form: ``true``, ``false`` or the caveat text."""
        if self.kind == ComplianceKind.COMPLIANT:
            return True
        if self.kind == ComplianceKind.NON_COMPLIANT:
            return False
        return self.caveat or ""


@dataclass(frozen=True)
class CrawlerIdentity:
    """A known AI crawler."""

    name: str
    user_agent: str
    operator: str
    purpose: str
    respects_robots: RobotsCompliance

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "userAgent": self.user_agent,
            "operator": self.operator,
            "purpose": self.purpose,
            "respectsRobots": self.respects_robots.to_value(),
        }


def parse_crawler_catalog(text: str) -> tuple[CrawlerIdentity, ...]:
    """
    Parse catalog YAML.

    Args:
        text: YAML document with a top-level ``bots`` list

    Returns:
        Crawler identities in file order

    Raises:
        ValueError: If the document is not a valid catalog
    """
    data = yaml.safe_load(text) or {}
    entries = data.get("bots") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError("Crawler catalog must contain a 'bots' list")

    crawlers = []
    for index, entry in enumerate(entries):
        try:
            crawlers.append(
                CrawlerIdentity(
                    name=str(entry["name"]),
                    user_agent=str(entry["userAgent"]),
                    operator=str(entry["operator"]),
                    purpose=str(entry["purpose"]),
                    respects_robots=RobotsCompliance.from_value(entry["respectsRobots"]),
                )
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid crawler catalog entry #{index}: {e}") from e

    return tuple(crawlers)


@lru_cache
def load_crawler_catalog(path: str | None = None) -> tuple[CrawlerIdentity, ...]:
    """
    Load the crawler catalog once per process.

    Args:
        path: Optional YAML path; falls back to settings, then the bundled file

    Returns:
        Immutable tuple of crawler identities
    """
    catalog_path = Path(path or get_settings().crawler_catalog_path or DEFAULT_CATALOG_PATH)
    crawlers = parse_crawler_catalog(catalog_path.read_text(encoding="utf-8"))

    logger.info("crawler_catalog_loaded", path=str(catalog_path), crawlers=len(crawlers))
    return crawlers
