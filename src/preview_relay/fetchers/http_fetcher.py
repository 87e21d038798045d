"""httpx-based upstream document fetcher."""

import time

import anyio
import httpx
import structlog

from preview_relay.models.document import FetchFailure, FetchResult, RemoteDocument
from preview_relay.utils.cache import DocumentCache

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; Twitterbot/1.0)"
DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpDocumentFetcher:
    """
    Fetches upstream pages while identifying as a link-preview crawler.

    Substack serves its complete preview markup to crawlers, so requests carry
    a crawler user agent. Each fetch is bounded by a hard timeout and is never
    retried; every outcome is returned as a value.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
        cache: DocumentCache | None = None,
        verify: bool | str = True,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            user_agent: User agent sent upstream
            timeout_seconds: Hard bound on a single fetch
            http_client: Shared HTTP client (optional)
            cache: Revalidation cache for fetched documents (optional)
            verify: SSL verification setting for an owned client
        """
        self._user_agent = user_agent
        self._timeout = timeout_seconds
        self._http_client = http_client
        self._owns_client = http_client is None
        self._cache = cache
        self._verify = verify

    @property
    def name(self) -> str:
        """Return the fetcher name."""
        return "http"

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            verify=self._verify,
        )

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch an upstream document.

        Args:
            url: URL to fetch

        Returns:
            RemoteDocument on a 2xx response, otherwise a FetchFailure
            describing the timeout, status code or transport error
        """
        if self._cache is not None:
            cached = await self._cache.get(url)
            if cached is not None:
                logger.debug("fetch_cache_hit", url=url)
                return cached

        start_time = time.monotonic()
        client = await self._get_client()
        should_close = self._owns_client and self._http_client is None

        try:
            with anyio.fail_after(self._timeout):
                response = await client.get(url, headers={"User-Agent": self._user_agent})
        except (TimeoutError, httpx.TimeoutException):
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.warning("fetch_timeout", url=url, timeout_seconds=self._timeout)
            return FetchFailure.timeout(url, self._timeout, elapsed_ms)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.warning("fetch_failed", url=url, error=str(e))
            return FetchFailure.network(url, str(e) or e.__class__.__name__, elapsed_ms)
        finally:
            if should_close:
                await client.aclose()

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if not response.is_success:
            logger.warning("fetch_http_error", url=url, status_code=response.status_code)
            return FetchFailure.http_status(url, response.status_code, elapsed_ms)

        document = RemoteDocument(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            body=response.text,
            elapsed_ms=elapsed_ms,
        )
        logger.debug(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            html_length=len(document.body),
            elapsed_ms=round(elapsed_ms, 1),
        )

        if self._cache is not None:
            await self._cache.set(url, document)

        return document

    async def close(self) -> None:
        """Close the fetcher and release resources."""
        if self._cache is not None:
            await self._cache.clear()
