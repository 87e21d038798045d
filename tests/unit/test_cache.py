"""Unit tests for the document cache."""

import asyncio

import pytest

from preview_relay.models.document import RemoteDocument
from preview_relay.utils.cache import DocumentCache


def _doc(url: str, body: str = "<html></html>") -> RemoteDocument:
    return RemoteDocument(url=url, final_url=url, status_code=200, body=body)


class TestDocumentCache:
    """Tests for DocumentCache."""

    @pytest.mark.asyncio
    async def test_get_set(self):
        cache = DocumentCache(max_size=10)
        document = _doc("https://a")

        await cache.set("https://a", document)
        assert await cache.get("https://a") == document
        assert await cache.get(" https://a ") == document

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self):
        cache = DocumentCache()
        assert await cache.get("https://missing") is None

    @pytest.mark.asyncio
    async def test_eviction_keeps_recently_used(self):
        cache = DocumentCache(max_size=2)
        await cache.set("a", _doc("a"))
        await cache.set("b", _doc("b"))

        await cache.get("a")
        await cache.set("c", _doc("c"))

        assert await cache.get("a") is not None
        assert await cache.get("b") is None
        assert await cache.get("c") is not None
        assert cache.size == 2

    @pytest.mark.asyncio
    async def test_expired_entries_are_dropped(self):
        cache = DocumentCache(ttl_seconds=0.05)
        await cache.set("a", _doc("a"))
        assert await cache.get("a") is not None

        await asyncio.sleep(0.1)

        assert await cache.get("a") is None
        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_disabled_cache_stores_nothing(self):
        cache = DocumentCache(enabled=False)
        await cache.set("a", _doc("a"))

        assert await cache.get("a") is None
        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_zero_size_cache_stores_nothing(self):
        cache = DocumentCache(max_size=0)
        await cache.set("a", _doc("a"))
        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_clear(self):
        cache = DocumentCache()
        await cache.set("a", _doc("a"))
        await cache.clear()
        assert cache.size == 0
