"""Utility modules for Preview Relay."""

from preview_relay.utils.cache import DocumentCache
from preview_relay.utils.meta_extractor import (
    extract,
    extract_field,
    resolve_metadata,
    sample_meta_tags,
)

__all__ = [
    "DocumentCache",
    "extract",
    "extract_field",
    "resolve_metadata",
    "sample_meta_tags",
]
