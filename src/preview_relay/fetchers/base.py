"""Base protocol for upstream document fetchers."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from preview_relay.models.document import FetchResult


@runtime_checkable
class DocumentFetcher(Protocol):
    """
    Protocol for upstream document fetchers.

    Fetchers never raise for upstream problems; they return a FetchFailure.
    """

    @property
    def name(self) -> str:
        """Return the fetcher name."""
        ...

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch a single URL.

        Args:
            url: URL to fetch

        Returns:
            RemoteDocument on a 2xx response, FetchFailure otherwise
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the fetcher and release resources."""
        ...
