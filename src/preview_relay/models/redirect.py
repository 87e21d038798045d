"""Redirect decision models."""

from pydantic import BaseModel, ConfigDict, Field

from preview_relay.exceptions import MalformedRouteError


class RouteParams(BaseModel):
    """The (publisher, post) pair a wrapped link points at."""

    publisher: str
    post_slug: str
    query: str = Field(default="", description="Raw query string, without '?'")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_request(
        cls, publisher: str | None, post_slug: str | None, query: str | None = None
    ) -> "RouteParams":
        """
        Build route parameters from request values.

        Raises:
            MalformedRouteError: If the publisher or slug is missing
        """
        publisher = (publisher or "").strip()
        post_slug = (post_slug or "").strip()
        if not publisher:
            raise MalformedRouteError("publisher")
        if not post_slug:
            raise MalformedRouteError("post_slug")
        return cls(publisher=publisher, post_slug=post_slug, query=(query or "").lstrip("?"))


class ClientContext(BaseModel):
    """Identity of the inbound requester."""

    user_agent: str = ""
    is_automated: bool = False

    model_config = ConfigDict(frozen=True)


class RedirectPlan(BaseModel):
    """How and when the redirect page sends the client to the upstream post."""

    target_url: str
    delay_seconds: int = Field(..., ge=0)
    emit_script: bool
    script_delay_ms: int = Field(default=100, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def refresh_directive(self) -> str:
        """Content of the declarative refresh directive."""
        return f"{self.delay_seconds};url={self.target_url}"
