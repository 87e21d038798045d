"""Models for fetched upstream documents."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class RemoteDocument(BaseModel):
    """An upstream page fetched successfully."""

    url: str = Field(..., description="The requested URL")
    final_url: str = Field(..., description="URL after following redirects")
    status_code: int = Field(..., ge=200, lt=300, description="HTTP status code")
    body: str = Field(default="", description="Decoded response body")
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    elapsed_ms: float = Field(default=0.0, ge=0, description="Fetch time in milliseconds")

    model_config = {"extra": "ignore"}


class FailureKind(str, Enum):
    """Why a fetch did not produce a document."""

    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"


class FetchFailure(BaseModel):
    """A fetch attempt that did not produce a document."""

    url: str
    kind: FailureKind
    status_code: int | None = None
    message: str = ""
    elapsed_ms: float = Field(default=0.0, ge=0)

    model_config = {"extra": "ignore"}

    @classmethod
    def timeout(cls, url: str, timeout_seconds: float, elapsed_ms: float = 0) -> "FetchFailure":
        """Create a failure for a fetch that exceeded its time bound."""
        return cls(
            url=url,
            kind=FailureKind.TIMEOUT,
            message=f"Fetch timed out after {timeout_seconds}s",
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def http_status(cls, url: str, status_code: int, elapsed_ms: float = 0) -> "FetchFailure":
        """Create a failure for a non-2xx upstream response."""
        return cls(
            url=url,
            kind=FailureKind.HTTP_STATUS,
            status_code=status_code,
            message=f"HTTP {status_code}",
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def network(cls, url: str, reason: str, elapsed_ms: float = 0) -> "FetchFailure":
        """Create a failure for a transport-level error."""
        return cls(
            url=url,
            kind=FailureKind.NETWORK,
            message=f"Request failed: {reason}",
            elapsed_ms=elapsed_ms,
        )


FetchResult = RemoteDocument | FetchFailure
