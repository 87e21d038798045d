"""Redirect planning tool for MCP."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from preview_relay.exceptions import MalformedRouteError
from preview_relay.models.diagnostic import ErrorResponse
from preview_relay.models.redirect import RouteParams
from preview_relay.redirect.classifier import classify
from preview_relay.redirect.planner import plan


def register(mcp: FastMCP) -> None:
    """Register the plan_redirect tool with the MCP server."""

    @mcp.tool()
    async def plan_redirect(
        publisher: str,
        post_slug: str,
        user_agent: str = "",
        query: str = "",
        ctx: Context[Any, Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Show how a wrapped link would redirect a given client.

        Args:
            publisher: Substack publication name (required)
            post_slug: Post slug (required)
            user_agent: User-Agent of the simulated client (default: human browser)
            query: Raw query string to carry over to the upstream URL

        Returns:
            The client classification and the redirect plan
        """
        from preview_relay.server import PreviewContext

        app_ctx: PreviewContext = ctx.request_context.lifespan_context

        try:
            route = RouteParams.from_request(publisher, post_slug, query)
        except MalformedRouteError as e:
            return ErrorResponse(error=e.message, details=e.field).model_dump(by_alias=True)

        client = classify(user_agent)
        redirect_plan = plan(route, client, app_ctx.settings.get_upstream_base_url())

        return {
            "client": client.model_dump(),
            "plan": {
                **redirect_plan.model_dump(),
                "refresh_directive": redirect_plan.refresh_directive,
            },
        }
