"""
Preview metadata extraction from raw HTML.

This is a targeted scan over ``<meta>`` tags, not a DOM parse. For every field
the extractor tries, in order:

1. ``property="<primary key>"`` followed by ``content="..."`` in the same tag
2. ``content="..."`` followed by ``property="<primary key>"``
3. the same two shapes with ``name="<fallback key>"``, when a fallback exists

Matching is case-insensitive, accepts single or double quotes, skips over any
attributes in between, and does not care about line breaks inside a tag.
The first non-empty value wins.

Known gap: an unquoted ``>`` inside an unrelated attribute ends the tag scan
early, and nothing stops a match from straddling two malformed tags. Substack
markup does not do either.
"""

import html as html_lib
import re
from collections.abc import Iterable
from functools import lru_cache
from itertools import islice

import structlog

from preview_relay.models.document import FetchFailure, FetchResult
from preview_relay.models.metadata import (
    DEFAULT_FIELD_SPECS,
    ExtractedMetadata,
    FieldSpec,
    MetadataResult,
)

logger = structlog.get_logger(__name__)

# A quoted attribute value; the closing quote must match the opening one
_VALUE = r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')"""

_META_TAG = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)

_INTEGER_FIELDS = frozenset({"image_width", "image_height"})


def _attribute(name: str) -> str:
    return rf"(?<![\w-]){name}\s*=\s*"


def _key_patterns(attribute: str, key: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    quoted_key = rf"""["']{re.escape(key)}["']"""
    key_first = (
        rf"<meta\b[^>]*?{_attribute(attribute)}{quoted_key}"
        rf"[^>]*?{_attribute('content')}{_VALUE}"
    )
    content_first = (
        rf"<meta\b[^>]*?{_attribute('content')}{_VALUE}"
        rf"[^>]*?{_attribute(attribute)}{quoted_key}"
    )
    return (
        re.compile(key_first, re.IGNORECASE),
        re.compile(content_first, re.IGNORECASE),
    )


@lru_cache(maxsize=128)
def field_patterns(spec: FieldSpec) -> tuple[re.Pattern[str], ...]:
    """
    Build the ordered candidate patterns for a field.

    Args:
        spec: Field definition

    Returns:
        Compiled patterns in priority order
    """
    patterns = list(_key_patterns("property", spec.primary_key))
    if spec.fallback_key:
        patterns.extend(_key_patterns("name", spec.fallback_key))
    return tuple(patterns)


def extract_field(html: str, spec: FieldSpec) -> str | None:
    """
    Find the value of a single field.

    Args:
        html: Raw document markup
        spec: Field definition

    Returns:
        The trimmed, entity-decoded value, or None when no pattern matches
    """
    if not html:
        return None

    for pattern in field_patterns(spec):
        # An empty tag does not hide a later tag with the same key
        for match in pattern.finditer(html):
            raw = match.group("dq")
            if raw is None:
                raw = match.group("sq")
            value = html_lib.unescape(raw or "").strip()
            if value:
                return value
    return None


def _to_int(value: str) -> int | None:
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number >= 0 else None


def extract(
    html: str,
    specs: Iterable[FieldSpec] = DEFAULT_FIELD_SPECS,
    source_url: str = "",
) -> ExtractedMetadata:
    """
    Extract preview metadata from raw HTML.

    Fields without a match keep their fallback: a fixed title and description,
    None for everything else.

    Args:
        html: Raw document markup
        specs: Fields to extract
        source_url: URL the markup was fetched from

    Returns:
        Fully populated ExtractedMetadata
    """
    values: dict[str, str | int] = {}
    for spec in specs:
        value = extract_field(html, spec)
        if value is None:
            continue
        if spec.field in _INTEGER_FIELDS:
            number = _to_int(value)
            if number is not None:
                values[spec.field] = number
        else:
            values[spec.field] = value

    return ExtractedMetadata(source_url=source_url, **values)


def matched_fields(html: str, specs: Iterable[FieldSpec] = DEFAULT_FIELD_SPECS) -> list[str]:
    """Return the names of the fields that have a match in the markup."""
    return [spec.field for spec in specs if extract_field(html, spec) is not None]


def sample_meta_tags(html: str, limit: int = 20) -> list[str]:
    """Return the first ``limit`` raw ``<meta>`` tags, for debugging."""
    if not html or limit <= 0:
        return []
    return [m.group(0) for m in islice(_META_TAG.finditer(html), limit)]


def resolve_metadata(
    result: FetchResult,
    specs: Iterable[FieldSpec] = DEFAULT_FIELD_SPECS,
    source_url: str | None = None,
) -> MetadataResult:
    """
    Turn a fetch outcome into metadata that is always usable.

    A failed fetch yields the generic fallback metadata together with the
    failure; a fetched document is run through the extractor.

    Args:
        result: Document or failure from the fetcher
        specs: Fields to extract
        source_url: Canonical URL to record, defaults to the fetched URL

    Returns:
        MetadataResult carrying the metadata and, if any, the failure
    """
    source_url = source_url or result.url

    if isinstance(result, FetchFailure):
        logger.info(
            "metadata_fallback",
            url=result.url,
            kind=result.kind.value,
            status_code=result.status_code,
        )
        return MetadataResult(metadata=ExtractedMetadata.fallback(source_url), failure=result)

    specs = tuple(specs)
    metadata = extract(result.body, specs, source_url=source_url)
    return MetadataResult(metadata=metadata, matched_fields=matched_fields(result.body, specs))
