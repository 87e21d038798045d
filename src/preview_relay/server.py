"""
Shared application context and the FastMCP server.

Configured for stateless HTTP mode for multi-client support.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog
from mcp.server.fastmcp import FastMCP

from preview_relay.config import Settings
from preview_relay.fetchers.http_fetcher import HttpDocumentFetcher
from preview_relay.tools import register_all_tools
from preview_relay.utils.cache import DocumentCache

logger = structlog.get_logger(__name__)


@dataclass
class PreviewContext:
    """Shared resources available to request handlers and tools."""

    settings: Settings
    http_client: httpx.AsyncClient
    fetcher: HttpDocumentFetcher


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Create the pooled HTTP client used for upstream fetches.

    Args:
        settings: Application settings

    Returns:
        Configured AsyncClient
    """
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        ),
        # No phase may time out before the fetcher's overall bound
        timeout=httpx.Timeout(settings.fetch_timeout_seconds),
        http2=True,
        follow_redirects=True,
        verify=settings.get_ssl_context(),
    )


@asynccontextmanager
async def open_preview_context(settings: Settings) -> AsyncIterator[PreviewContext]:
    """
    Open the shared HTTP client, cache and fetcher.

    Initialize expensive resources once, share across all requests.
    """
    http_client = create_http_client(settings)
    cache = DocumentCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_size=settings.cache_max_size,
        enabled=settings.cache_enabled,
    )
    fetcher = HttpDocumentFetcher(
        user_agent=settings.fetch_user_agent,
        timeout_seconds=settings.fetch_timeout_seconds,
        http_client=http_client,
        cache=cache,
    )

    logger.info(
        "preview_context_opened",
        upstream=settings.get_upstream_base_url(),
        cache_enabled=settings.cache_enabled,
    )

    try:
        yield PreviewContext(settings=settings, http_client=http_client, fetcher=fetcher)
    finally:
        logger.info("preview_context_closed")
        await fetcher.close()
        await http_client.aclose()


def create_mcp(settings: Settings) -> FastMCP:
    """
    Create a FastMCP server exposing the relay tools.

    Args:
        settings: Application settings injected into the tool context

    Returns:
        FastMCP server with all tools registered
    """

    @asynccontextmanager
    async def app_lifespan(_server: FastMCP) -> AsyncIterator[PreviewContext]:
        async with open_preview_context(settings) as context:
            yield context

    # stateless_http=True allows multiple concurrent clients
    # json_response=True for structured responses
    mcp = FastMCP(
        "Preview Relay",
        lifespan=app_lifespan,
        stateless_http=True,
        json_response=True,
    )

    register_all_tools(mcp)
    return mcp
