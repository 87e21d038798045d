"""Pydantic models for Preview Relay."""

from preview_relay.models.diagnostic import (
    DiagnosticDebug,
    DiagnosticReport,
    ErrorResponse,
    WrappedLink,
)
from preview_relay.models.document import FailureKind, FetchFailure, FetchResult, RemoteDocument
from preview_relay.models.metadata import (
    DEFAULT_DESCRIPTION,
    DEFAULT_FIELD_SPECS,
    DEFAULT_TITLE,
    ExtractedMetadata,
    FieldSpec,
    MetadataResult,
)
from preview_relay.models.redirect import ClientContext, RedirectPlan, RouteParams

__all__ = [
    "RemoteDocument",
    "FailureKind",
    "FetchFailure",
    "FetchResult",
    "FieldSpec",
    "ExtractedMetadata",
    "MetadataResult",
    "DEFAULT_FIELD_SPECS",
    "DEFAULT_TITLE",
    "DEFAULT_DESCRIPTION",
    "RouteParams",
    "ClientContext",
    "RedirectPlan",
    "DiagnosticDebug",
    "DiagnosticReport",
    "ErrorResponse",
    "WrappedLink",
]
