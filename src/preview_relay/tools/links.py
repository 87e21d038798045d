"""Link wrapping tool for MCP."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from preview_relay.exceptions import ValidationError
from preview_relay.models.diagnostic import ErrorResponse
from preview_relay.utils.links import wrap_post_url


def register(mcp: FastMCP) -> None:
    """Register the wrap_link tool with the MCP server."""

    @mcp.tool()
    async def wrap_link(
        url: str,
        ctx: Context[Any, Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Rewrite a Substack post URL into a preview-friendly wrapped link.

        Args:
            url: Substack post URL, either open.substack.com/pub/<publisher>/p/<slug>
                 or <publisher>.substack.com/p/<slug> (required)

        Returns:
            The wrapped URL with its publisher and post slug, or an error
        """
        from preview_relay.server import PreviewContext

        app_ctx: PreviewContext = ctx.request_context.lifespan_context
        settings = app_ctx.settings

        try:
            wrapped = wrap_post_url(url, settings.get_base_url(), settings.get_upstream_host())
        except ValidationError as e:
            return ErrorResponse(error=e.message).model_dump(by_alias=True, exclude_none=True)

        return wrapped.model_dump(by_alias=True)
