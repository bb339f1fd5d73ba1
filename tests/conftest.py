"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ.pop("SENTRY_DSN", None)
os.environ.pop("CRAWLER_CATALOG_PATH", None)

from scanner.crawler.catalog import (  # noqa: E402
    CrawlerIdentity,
    RobotsCompliance,
    load_crawler_catalog,
)


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    """Make every test see the test env, not stale or .env values."""
    from api.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    from api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def catalog() -> tuple[CrawlerIdentity, ...]:
    """The bundled crawler catalog."""
    return load_crawler_catalog()


@pytest.fixture
def small_catalog() -> tuple[CrawlerIdentity, ...]:
    """Three crawlers covering each robots compliance variant."""
    return (
        CrawlerIdentity(
            name="GPTBot",
            user_agent="GPTBot",
            operator="OpenAI",
            purpose="Model training",
            respects_robots=RobotsCompliance.compliant(),
        ),
        CrawlerIdentity(
            name="ClaudeBot",
            user_agent="ClaudeBot",
            operator="Anthropic",
            purpose="Model training",
            respects_robots=RobotsCompliance.compliant(),
        ),
        CrawlerIdentity(
            name="Bytespider",
            user_agent="Bytespider",
            operator="ByteDance",
            purpose="Model training",
            respects_robots=RobotsCompliance.non_compliant(),
        ),
    )


Handler = Callable[[httpx.Request], httpx.Response]


def make_site_handler(
    robots: str | None = None,
    html: str = "<html><body></body></html>",
    page_status: int = 200,
    page_headers: dict[str, str] | None = None,
    files: dict[str, str] | None = None,
) -> Handler:
    """Build a MockTransport handler serving one fake site."""
    files = files or {}

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/robots.txt":
            if robots is None:
                return httpx.Response(404, text="Not found")
            return httpx.Response(200, text=robots)
        if path in files:
            return httpx.Response(200, text=files[path])
        if path.startswith("/llms") or path.startswith("/ai.txt") or path.startswith("/.well-known"):
            return httpx.Response(404, text="")
        headers = {"content-type": "text/html; charset=utf-8", **(page_headers or {})}
        return httpx.Response(page_status, text=html, headers=headers)

    return handler


@pytest.fixture
def site_handler() -> Callable[..., Handler]:
    """Factory fixture for fake-site MockTransport handlers."""
    return make_site_handler
