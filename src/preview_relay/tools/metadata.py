"""Metadata inspection tool for MCP."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from preview_relay.exceptions import InvalidURLError
from preview_relay.models.diagnostic import ErrorResponse
from preview_relay.models.document import FetchFailure
from preview_relay.pipeline import failure_response, inspect_url
from preview_relay.utils.links import validate_url


def register(mcp: FastMCP) -> None:
    """Register the inspect_metadata tool with the MCP server."""

    @mcp.tool()
    async def inspect_metadata(
        url: str,
        ctx: Context[Any, Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Fetch a page the way link-preview crawlers do and report its preview metadata.

        Useful for checking why a wrapped link renders a generic preview.

        Args:
            url: Absolute http(s) URL to inspect (required)

        Returns:
            Extracted metadata, document length and a sample of raw meta tags,
            or an error with details
        """
        from preview_relay.server import PreviewContext

        app_ctx: PreviewContext = ctx.request_context.lifespan_context

        try:
            url = validate_url(url)
        except InvalidURLError as e:
            error = ErrorResponse(error="Invalid url parameter", details=e.message)
            return error.model_dump(by_alias=True, exclude_none=True)

        report = await inspect_url(app_ctx.fetcher, url, app_ctx.settings.debug_sample_size)
        if isinstance(report, FetchFailure):
            error, status = failure_response(report)
            return {**error.model_dump(by_alias=True, exclude_none=True), "status": status}

        return report.model_dump(by_alias=True, mode="json")
