"""Shared test fixtures for the Preview Relay test suite."""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import respx

BOT_USER_AGENT = "Mozilla/5.0 (compatible; Twitterbot/1.0)"
HUMAN_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120"

# ─── Pytest Configuration ────────────────────────────────────────


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no I/O)")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


# ─── Async Backend ───────────────────────────────────────────────


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


# ─── Settings Fixtures ───────────────────────────────────────────


@pytest.fixture
def test_settings():
    """Settings pointing at a fake upstream, with caching disabled."""
    from preview_relay.config import Settings

    return Settings(
        debug=True,
        log_level="DEBUG",
        base_url="https://relay.test",
        upstream_base_url="https://upstream",
        fetch_timeout_seconds=2.0,
        cache_enabled=False,
    )


# ─── HTTP Client Fixtures ────────────────────────────────────────


@pytest.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client for tests."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


@pytest.fixture
def mock_http():
    """RESPX mock router for HTTP mocking."""
    with respx.mock(assert_all_called=False) as router:
        yield router


# ─── Sample Data Fixtures ────────────────────────────────────────


@pytest.fixture
def bot_user_agent() -> str:
    return BOT_USER_AGENT


@pytest.fixture
def human_user_agent() -> str:
    return HUMAN_USER_AGENT


@pytest.fixture
def substack_html() -> str:
    """Head of a Substack post page, pretty-printed the way Substack ships it."""
    return """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Hello World - by Alice</title>
    <meta property="og:url" content="https://alice.substack.com/p/hello-world">
    <meta
        property="og:title"
        content="Hello World">
    <meta name="twitter:title" content="Hello World (twitter)">
    <meta property="og:description" content="A post about saying hello.">
    <meta name="twitter:description" content="Twitter description">
    <meta property="og:image" content="https://substackcdn.com/image/fetch/hello.png">
    <meta property="og:image:width" content="1200">
    <meta property="og:image:height" content="630">
    <meta property="og:site_name" content="Alice&#39;s Newsletter">
    <meta name="twitter:card" content="summary_large_image">
</head>
<body><p>Hello!</p></body>
</html>
"""
