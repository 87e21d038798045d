"""Custom exceptions for Preview Relay."""


class PreviewRelayError(Exception):
    """Base exception for all Preview Relay errors."""

    pass


# ─── Validation Errors ───────────────────────────────────────────


class ValidationError(PreviewRelayError):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Validation error for '{field}': {message}")


class MalformedRouteError(ValidationError):
    """Raised when a redirect route lacks its publisher or post slug."""

    def __init__(self, field: str) -> None:
        super().__init__(field, "Route parameter is missing or empty")


class InvalidURLError(ValidationError):
    """Raised when a URL is invalid."""

    def __init__(self, url: str, reason: str = "Invalid URL format") -> None:
        self.url = url
        super().__init__("url", f"{reason}: {url}")


class UnsupportedLinkError(ValidationError):
    """Raised when a URL is valid but does not point at a Substack post."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("url", f"Not a Substack post URL: {url}")
