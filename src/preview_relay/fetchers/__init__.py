"""Upstream document fetchers."""

from preview_relay.fetchers.base import DocumentFetcher
from preview_relay.fetchers.http_fetcher import HttpDocumentFetcher

__all__ = [
    "DocumentFetcher",
    "HttpDocumentFetcher",
]
