"""vlr.gg HTTP client built on httpx.

vlr.gg serves plain server-rendered HTML, so a regular async HTTP client
with a desktop User-Agent is sufficient. Integrates tenacity for retry
logic on transient failures (network errors, HTTP 429, HTTP 5xx). Every
other non-2xx status is raised immediately.

``fetch_many()`` dispatches URLs concurrently via ``asyncio.gather()``,
bounded by ``ScraperConfig.concurrent_requests``. Failures are captured
per URL and returned in place of the body, so one failed page never
cancels the others.
"""

import asyncio
import logging
from typing import Any

import httpx
from bs4 import BeautifulSoup
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from vlr_scraper.config import ScraperConfig
from vlr_scraper.exceptions import (
    FetchError,
    PageNotFound,
    RateLimited,
    ServerError,
    TransportError,
    UnexpectedStatus,
)
from vlr_scraper.extract import make_soup
from vlr_scraper.user_agents import UserAgentRotator

logger = logging.getLogger(__name__)

RETRIABLE = (FetchError, RateLimited, ServerError)


class VlrClient:
    """Async HTTP client for vlr.gg.

    Usage:
        async with VlrClient() as client:
            html = await client.fetch("https://www.vlr.gg/429519")
            results = await client.fetch_many(["url1", "url2"])

    A pre-built ``httpx.AsyncClient`` may be passed in (tests use one
    backed by ``httpx.MockTransport``); it is closed with this client.
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        if config is None:
            config = ScraperConfig()

        self._config = config
        self._http = http
        self._semaphore = asyncio.Semaphore(max(1, config.concurrent_requests))

        # Request counters
        self._request_count = 0
        self._success_count = 0
        self._failure_count = 0

        # Retry policy is per client; fetch() runs each call through a copy
        self._retrying = AsyncRetrying(
            retry=retry_if_exception_type(RETRIABLE),
            wait=wait_exponential_jitter(
                multiplier=config.retry_initial_wait,
                max=config.retry_max_wait,
                jitter=1,
            ),
            stop=stop_after_attempt(max(1, config.max_retries)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    @property
    def config(self) -> ScraperConfig:
        return self._config

    def url(self, path: str) -> str:
        """Absolute URL for a site path such as ``/team/2593``."""
        return self._config.base_url.rstrip("/") + path

    def _headers(self) -> dict[str, str]:
        if self._config.user_agent:
            return {"User-Agent": self._config.user_agent}
        return UserAgentRotator(self._config.browser_family).get_headers()

    async def start(self) -> None:
        """Open the httpx session. Headers are chosen once per session."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            headers=self._headers(),
            timeout=httpx.Timeout(
                self._config.request_timeout, connect=self._config.connect_timeout
            ),
            follow_redirects=self._config.follow_redirects,
            proxy=self._config.proxy,
        )
        logger.debug("HTTP session started (base %s)", self._config.base_url)

    async def close(self) -> None:
        if self._http is None:
            return
        http = self._http
        self._http = None
        await http.aclose()

    async def __aenter__(self) -> "VlrClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def fetch(self, url: str) -> str:
        """Fetch a URL and return the response body.

        Args:
            url: The full URL to fetch.

        Returns:
            The page HTML as a string.

        Raises:
            FetchError: On network failure.
            TransportError: If the client is not started.
            RateLimited: On HTTP 429 (after retries).
            ServerError: On HTTP 5xx (after retries).
            PageNotFound: On HTTP 404.
            UnexpectedStatus: On any other non-2xx status.
        """
        return await self._retrying.copy()(self._fetch_once, url)

    async def _fetch_once(self, url: str) -> str:
        if self._http is None:
            raise TransportError("Client not started. Call start() first.", url=url)

        self._request_count += 1
        async with self._semaphore:
            try:
                response = await self._http.get(url)
            except httpx.HTTPError as exc:
                self._failure_count += 1
                raise FetchError(f"Request failed: {exc!r}", url=url) from exc

        if not response.is_success:
            self._failure_count += 1
            raise _status_error(response.status_code, url)

        self._success_count += 1
        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return response.text

    async def fetch_document(self, url: str) -> BeautifulSoup:
        """Fetch a URL and parse it with lxml."""
        return make_soup(await self.fetch(url))

    async def fetch_many(self, urls: list[str]) -> list[str | TransportError]:
        """Fetch multiple URLs concurrently.

        Returns:
            List of results in the same order as urls. Each element is
            either the HTML string on success or the TransportError that
            ended its attempts.
        """
        async def _safe_fetch(url: str) -> str | TransportError:
            try:
                return await self.fetch(url)
            except TransportError as exc:
                return exc

        results = await asyncio.gather(*[_safe_fetch(url) for url in urls])
        return list(results)

    @property
    def stats(self) -> dict:
        """Return current client statistics."""
        total = self._request_count
        return {
            "requests": total,
            "successes": self._success_count,
            "failures": self._failure_count,
            "success_rate": (self._success_count / total) if total > 0 else 0.0,
        }


def _status_error(status: int, url: str) -> TransportError:
    if status == 404:
        return PageNotFound(f"HTTP 404 for {url}", url=url, status_code=status)
    if status == 429:
        return RateLimited(f"HTTP 429 for {url}", url=url, status_code=status)
    if status >= 500:
        return ServerError(f"HTTP {status} for {url}", url=url, status_code=status)
    return UnexpectedStatus(f"HTTP {status} for {url}", url=url, status_code=status)
