"""In-process revalidation cache for fetched upstream documents."""

import time
from collections import OrderedDict

import anyio

from preview_relay.models.document import RemoteDocument


class DocumentCache:
    """
    LRU cache of successfully fetched documents with a revalidation window.

    Entries older than ``ttl_seconds`` are treated as missing and refetched.
    Only documents are stored; failed fetches never are.
    """

    def __init__(self, ttl_seconds: float = 3600, max_size: int = 500, enabled: bool = True) -> None:
        """
        Initialize the document cache.

        Args:
            ttl_seconds: Revalidation window for cached documents
            max_size: Maximum number of documents kept
            enabled: Whether caching is enabled
        """
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self.enabled = enabled
        self._entries: OrderedDict[str, tuple[RemoteDocument, float]] = OrderedDict()
        self._lock = anyio.Lock()

    @staticmethod
    def _key(url: str) -> str:
        return url.strip()

    def _is_expired(self, stored_at: float) -> bool:
        return time.monotonic() - stored_at > self.ttl_seconds

    async def get(self, url: str) -> RemoteDocument | None:
        """
        Get a cached document.

        Args:
            url: Requested URL

        Returns:
            The cached document, or None if missing or stale
        """
        if not self.enabled:
            return None

        key = self._key(url)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            document, stored_at = entry
            if self._is_expired(stored_at):
                del self._entries[key]
                return None

            self._entries.move_to_end(key)
            return document

    async def set(self, url: str, document: RemoteDocument) -> None:
        """
        Store a fetched document.

        Args:
            url: Requested URL
            document: Document to keep
        """
        if not self.enabled or self.max_size <= 0:
            return

        key = self._key(url)
        async with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
            self._entries[key] = (document, time.monotonic())

    async def clear(self) -> None:
        """Drop every cached document."""
        async with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        """Return current cache size."""
        return len(self._entries)
