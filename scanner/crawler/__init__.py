"""Crawler package: input normalization, robots.txt rules and retrieval."""

# Lazy imports keep `scanner.crawler.catalog` importable without pulling in
# the evaluators that scanner.crawler.url depends on.

from importlib import import_module
from typing import Any

_EXPORTS = {
    # URL
    "ScanTarget": "scanner.crawler.url",
    "normalize_scan_input": "scanner.crawler.url",
    "get_base_url": "scanner.crawler.url",
    # Robots
    "RobotsParser": "scanner.crawler.robots",
    "RobotsRule": "scanner.crawler.robots",
    # Catalog
    "CrawlerIdentity": "scanner.crawler.catalog",
    "RobotsCompliance": "scanner.crawler.catalog",
    "load_crawler_catalog": "scanner.crawler.catalog",
    # Retrieval
    "PageRetriever": "scanner.crawler.fetcher",
    "RetrievedPage": "scanner.crawler.fetcher",
    "RetrievedRobotsFile": "scanner.crawler.fetcher",
    "DiscoveryFileProbe": "scanner.crawler.fetcher",
    "RetrievedSite": "scanner.crawler.fetcher",
    "DISCOVERY_FILES": "scanner.crawler.fetcher",
}

__all__ = list(_EXPORTS)


def __getattr__(name: str) -> Any:
    """Lazy import for crawler submodules."""
    if name in _EXPORTS:
        return getattr(import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module 'scanner.crawler' has no attribute '{name}'")
