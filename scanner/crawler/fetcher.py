"""Retrieval layer: robots.txt, the target page and AI discovery files.

Every request is attempted exactly once and failures are returned as data.
A broken robots.txt must not stop the page fetch, and a missing llms.txt
is simply "not found".
"""

import asyncio
import time
from dataclasses import dataclass

import httpx
import structlog

from api.config import get_settings

logger = structlog.get_logger(__name__)

# Anything this short is treated as a placeholder, not a real file
MIN_DISCOVERY_FILE_BYTES = 10


@dataclass(frozen=True)
class DiscoveryFile:
    """A well-known path that signals AI-crawler friendliness."""

    path: str
    name: str
    description: str


DISCOVERY_FILES: tuple[DiscoveryFile, ...] = (
    DiscoveryFile("/llms.txt", "llms.txt", "LLM-friendly site description"),
    DiscoveryFile("/llms-full.txt", "llms-full.txt", "Full LLM content"),
    DiscoveryFile("/ai.txt", "ai.txt", "AI crawler permissions"),
    DiscoveryFile("/.well-known/ai-plugin.json", "ai-plugin.json", "OpenAI plugin manifest"),
)


@dataclass(frozen=True)
class RetrievedRobotsFile:
    """Result of fetching robots.txt."""

    url: str
    content: str
    found: bool


@dataclass(frozen=True)
class RetrievedPage:
    """Result of fetching the scanned page."""

    url: str
    final_url: str  # After redirects
    status_code: int  # 0 when the request never completed
    headers: httpx.Headers
    html: str
    latency_ms: int
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and 200 <= self.status_code < 400


@dataclass(frozen=True)
class DiscoveryFileProbe:
    """Result of probing one discovery file."""

    file: DiscoveryFile
    found: bool
    byte_length: int = 0
    status_code: int = 0
    error: str | None = None

    @property
    def name(self) -> str:
        return self.file.name

    @property
    def is_empty(self) -> bool:
        """Responded successfully but with a placeholder body."""
        return not self.found and self.error is None and 200 <= self.status_code < 300


@dataclass(frozen=True)
class RetrievedSite:
    """Everything fetched for one scan."""

    robots: RetrievedRobotsFile
    page: RetrievedPage
    discovery: tuple[DiscoveryFileProbe, ...]


class PageRetriever:
    """Fetches the inputs of one scan concurrently."""

    def __init__(
        self,
        user_agent: str | None = None,
        robots_timeout: float | None = None,
        page_timeout: float | None = None,
        probe_timeout: float | None = None,
        max_body_bytes: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.user_agent = user_agent or settings.scanner_user_agent
        self.robots_timeout = robots_timeout or settings.scanner_robots_timeout
        self.page_timeout = page_timeout or settings.scanner_page_timeout
        self.probe_timeout = probe_timeout or settings.scanner_probe_timeout
        self.max_body_bytes = max_body_bytes or settings.scanner_max_body_bytes
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def retrieve(self, url: str, base_url: str) -> RetrievedSite:
        """
        Fetch robots.txt, the page and every discovery file in parallel.

        Args:
            url: Normalized page URL
            base_url: Origin used for robots.txt and discovery paths

        Returns:
            RetrievedSite; never raises for network problems
        """
        async with self._client() as client:
            robots, page, probes = await asyncio.gather(
                self.fetch_robots_txt(client, f"{base_url}/robots.txt"),
                self.fetch_page(client, url),
                self.probe_discovery_files(client, base_url),
            )

        logger.info(
            "retrieval_complete",
            url=url,
            robots_txt_found=robots.found,
            status_code=page.status_code,
            latency_ms=page.latency_ms,
            page_error=page.error,
            discovery_files_found=sum(1 for p in probes if p.found),
        )
        return RetrievedSite(robots=robots, page=page, discovery=probes)

    async def fetch_robots_txt(self, client: httpx.AsyncClient, robots_url: str) -> RetrievedRobotsFile:
        """Fetch robots.txt; anything but a 2xx within robots_timeout counts as not found."""
        try:
            return await asyncio.wait_for(
                self._fetch_robots_txt(client, robots_url), self.robots_timeout
            )
        except (httpx.TimeoutException, TimeoutError):
            logger.warning("robots_txt_fetch_timeout", url=robots_url, timeout=self.robots_timeout)
        except Exception as e:
            logger.warning("robots_txt_fetch_error", url=robots_url, error=str(e))
        return RetrievedRobotsFile(url=robots_url, content="", found=False)

    async def _fetch_robots_txt(self, client: httpx.AsyncClient, robots_url: str) -> RetrievedRobotsFile:
        async with client.stream(
            "GET",
            robots_url,
            timeout=self.robots_timeout,
            follow_redirects=True,
        ) as response:
            if not response.is_success:
                logger.info("robots_txt_not_found", url=robots_url, status=response.status_code)
                return RetrievedRobotsFile(url=robots_url, content="", found=False)
            body = await self._read_capped(response)

        return RetrievedRobotsFile(
            url=robots_url,
            content=body.decode(response.encoding or "utf-8", errors="replace"),
            found=True,
        )

    async def fetch_page(self, client: httpx.AsyncClient, url: str) -> RetrievedPage:
        """
        Fetch the page, following redirects and reading at most max_body_bytes.

        Latency is measured until response headers arrive.
        """
        start = time.perf_counter()
        try:
            return await asyncio.wait_for(self._fetch_page(client, url, start), self.page_timeout)
        except (httpx.TimeoutException, TimeoutError):
            error = f"Request timed out after {self.page_timeout}s"
            logger.warning("page_fetch_timeout", url=url, timeout=self.page_timeout)
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.warning("page_fetch_error", url=url, error=error)

        return RetrievedPage(
            url=url,
            final_url=url,
            status_code=0,
            headers=httpx.Headers(),
            html="",
            latency_ms=int((time.perf_counter() - start) * 1000),
            error=error,
        )

    async def _fetch_page(self, client: httpx.AsyncClient, url: str, start: float) -> RetrievedPage:
        async with client.stream(
            "GET",
            url,
            headers={"Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"},
            timeout=self.page_timeout,
            follow_redirects=True,
        ) as response:
            latency_ms = int((time.perf_counter() - start) * 1000)
            body = await self._read_capped(response)

        return RetrievedPage(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            headers=response.headers,
            html=body.decode(response.encoding or "utf-8", errors="replace"),
            latency_ms=latency_ms,
        )

    async def probe_discovery_files(
        self, client: httpx.AsyncClient, base_url: str
    ) -> tuple[DiscoveryFileProbe, ...]:
        """Probe every well-known discovery path concurrently, in DISCOVERY_FILES order."""
        probes = await asyncio.gather(
            *(self.probe_discovery_file(client, base_url, f) for f in DISCOVERY_FILES)
        )
        return tuple(probes)

    async def probe_discovery_file(
        self, client: httpx.AsyncClient, base_url: str, file: DiscoveryFile
    ) -> DiscoveryFileProbe:
        """Check whether a discovery file exists with real content within probe_timeout."""
        url = f"{base_url}{file.path}"
        try:
            return await asyncio.wait_for(
                self._probe_discovery_file(client, url, file), self.probe_timeout
            )
        except (httpx.TimeoutException, TimeoutError):
            logger.debug("discovery_file_probe_timeout", url=url, timeout=self.probe_timeout)
            return DiscoveryFileProbe(
                file=file, found=False, error=f"Request timed out after {self.probe_timeout}s"
            )
        except Exception as e:
            logger.debug("discovery_file_probe_failed", url=url, error=str(e))
            return DiscoveryFileProbe(file=file, found=False, error=str(e) or type(e).__name__)

    async def _probe_discovery_file(
        self, client: httpx.AsyncClient, url: str, file: DiscoveryFile
    ) -> DiscoveryFileProbe:
        async with client.stream(
            "GET",
            url,
            timeout=self.probe_timeout,
            follow_redirects=True,
        ) as response:
            if not response.is_success:
                return DiscoveryFileProbe(file=file, found=False, status_code=response.status_code)
            body = await self._read_capped(response)

        return DiscoveryFileProbe(
            file=file,
            found=len(body) > MIN_DISCOVERY_FILE_BYTES,
            byte_length=len(body),
            status_code=response.status_code,
        )

    async def _read_capped(self, response: httpx.Response) -> bytes:
        """Read the body until it ends or the cap is reached, whichever is first."""
        chunks: list[bytes] = []
        total = 0
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
            total += len(chunk)
            if total >= self.max_body_bytes:
                break
        return b"".join(chunks)[: self.max_body_bytes]
