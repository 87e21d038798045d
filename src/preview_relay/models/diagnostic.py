"""Response models for the diagnostic and link-wrapping endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from preview_relay.models.metadata import ExtractedMetadata

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class DiagnosticDebug(BaseModel):
    """Raw extraction details for operators."""

    sample_meta_tags: list[str] = Field(default_factory=list)
    matched_fields: list[str] = Field(default_factory=list)

    model_config = _camel


class DiagnosticReport(BaseModel):
    """What the extractor sees for a given URL."""

    success: bool = True
    metadata: ExtractedMetadata
    html_length: int = Field(..., ge=0)
    debug: DiagnosticDebug = Field(default_factory=DiagnosticDebug)

    model_config = _camel


class ErrorResponse(BaseModel):
    """Error body returned by the JSON endpoints."""

    error: str
    details: str | None = None

    model_config = _camel


class WrappedLink(BaseModel):
    """A Substack post link rewritten onto this service."""

    wrapped_url: str
    publisher: str
    post_slug: str

    model_config = _camel
