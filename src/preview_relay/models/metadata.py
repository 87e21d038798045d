"""Preview metadata models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from preview_relay.models.document import FetchFailure

DEFAULT_TITLE = "Substack Post"
DEFAULT_DESCRIPTION = "Read this post on Substack"


class FieldSpec(BaseModel):
    """
    A preview field to extract from document markup.

    The primary key is matched against ``property`` attributes; the fallback
    key, when given, against ``name`` attributes.
    """

    field: str
    primary_key: str
    fallback_key: str | None = None

    model_config = ConfigDict(frozen=True)


# Substack duplicates most preview data under og: and twitter:
DEFAULT_FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec(field="title", primary_key="og:title", fallback_key="twitter:title"),
    FieldSpec(field="description", primary_key="og:description", fallback_key="twitter:description"),
    FieldSpec(field="image", primary_key="og:image", fallback_key="twitter:image"),
    FieldSpec(field="image_width", primary_key="og:image:width"),
    FieldSpec(field="image_height", primary_key="og:image:height"),
    FieldSpec(field="site_name", primary_key="og:site_name"),
    FieldSpec(field="card_type", primary_key="twitter:card", fallback_key="twitter:card"),
)


class ExtractedMetadata(BaseModel):
    """Preview metadata for an upstream post, with every field defined."""

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    image: str | None = None
    image_width: int | None = None
    image_height: int | None = None
    site_name: str | None = None
    card_type: str | None = None
    source_url: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @classmethod
    def fallback(cls, source_url: str) -> "ExtractedMetadata":
        """Generic metadata used when the upstream document is unavailable."""
        return cls(source_url=source_url)


class MetadataResult(BaseModel):
    """
    Outcome of the best-effort metadata step.

    ``metadata`` is always usable. ``failure`` records why it is generic when
    the fetch did not succeed.
    """

    metadata: ExtractedMetadata
    failure: FetchFailure | None = None
    matched_fields: list[str] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @property
    def degraded(self) -> bool:
        """True when the metadata came from defaults instead of the document."""
        return self.failure is not None
