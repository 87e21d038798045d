"""
Starlette ASGI application with the redirect routes and FastMCP server mounted.

Settings are injected once through ``create_app``; handlers read them from the
application state.
"""

import contextlib
from collections.abc import AsyncIterator

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.routing import Mount, Route

from preview_relay import __version__
from preview_relay.config import Settings, settings
from preview_relay.exceptions import InvalidURLError, MalformedRouteError, ValidationError
from preview_relay.models.diagnostic import ErrorResponse
from preview_relay.models.document import FetchFailure
from preview_relay.models.redirect import RouteParams
from preview_relay.pipeline import failure_response, inspect_url, prepare_redirect
from preview_relay.server import PreviewContext, create_mcp, open_preview_context
from preview_relay.utils.health import HealthChecker
from preview_relay.utils.links import validate_url, wrap_post_url

logger = structlog.get_logger(__name__)

REDIRECT_HEADERS = {
    "Cache-Control": "public, max-age=60",
    # Crawlers and browsers get different pages for the same URL
    "Vary": "User-Agent",
}


def _error(error: ErrorResponse, status_code: int) -> JSONResponse:
    return JSONResponse(error.model_dump(by_alias=True, exclude_none=True), status_code=status_code)


async def redirect_page(request: Request) -> Response:
    """
    Redirect page for a wrapped post link.

    Crawlers get the post's preview metadata and a delayed refresh; browsers
    are sent on immediately.
    """
    context: PreviewContext = request.app.state.preview

    try:
        route = RouteParams.from_request(
            request.path_params.get("publisher"),
            request.path_params.get("post_slug"),
            request.url.query,
        )
    except MalformedRouteError as e:
        logger.warning("malformed_route", field=e.field, path=request.url.path)
        return PlainTextResponse(f"Invalid link: {e.field} missing", status_code=400)

    outcome = await prepare_redirect(
        context.fetcher,
        route,
        request.headers.get("user-agent"),
        context.settings.get_upstream_base_url(),
    )
    return HTMLResponse(outcome.html, headers=REDIRECT_HEADERS)


async def debug_metadata(request: Request) -> JSONResponse:
    """
    Diagnostic endpoint showing what the extractor sees at a URL.

    Returns 200 with the report, 400 for a bad ``url`` parameter, and the
    upstream status (or 502/504) when the fetch fails.
    """
    context: PreviewContext = request.app.state.preview

    url = request.query_params.get("url")
    if not url:
        return _error(ErrorResponse(error="Missing url parameter"), 400)

    try:
        url = validate_url(url)
    except InvalidURLError as e:
        return _error(ErrorResponse(error="Invalid url parameter", details=e.message), 400)

    report = await inspect_url(context.fetcher, url, context.settings.debug_sample_size)
    if isinstance(report, FetchFailure):
        error, status_code = failure_response(report)
        return _error(error, status_code)

    return JSONResponse(report.model_dump(by_alias=True, mode="json"))


async def wrap_link(request: Request) -> JSONResponse:
    """Rewrite a Substack post URL onto this service."""
    app_settings: Settings = request.app.state.settings

    url = request.query_params.get("url")
    if not url:
        return _error(ErrorResponse(error="Missing url parameter"), 400)

    try:
        wrapped = wrap_post_url(url, app_settings.get_base_url(), app_settings.get_upstream_host())
    except ValidationError as e:
        return _error(ErrorResponse(error=e.message), 400)

    return JSONResponse(wrapped.model_dump(by_alias=True))


async def health_check(request: Request) -> JSONResponse:
    """
    Kubernetes-compatible health check endpoint.

    Returns 200 if healthy, 503 if unhealthy.
    """
    checker = HealthChecker(request.app.state.settings)
    status = await checker.check_all()

    http_status = 200 if status["healthy"] else 503
    return JSONResponse(status, status_code=http_status)


async def readiness_check(request: Request) -> JSONResponse:
    """
    Readiness probe - checks if server can accept requests.

    Returns 200 if ready, 503 if not ready.
    """
    checker = HealthChecker(request.app.state.settings)
    status = await checker.check_readiness()

    http_status = 200 if status["ready"] else 503
    return JSONResponse(status, status_code=http_status)


async def liveness_check(request: Request) -> JSONResponse:
    """
    Liveness probe - minimal check that server is alive.

    Always returns 200 if the server is running.
    """
    checker = HealthChecker(request.app.state.settings)
    status = await checker.check_liveness()

    return JSONResponse(status, status_code=200)


async def root(request: Request) -> JSONResponse:
    """Root endpoint with server information."""
    app_settings: Settings = request.app.state.settings
    return JSONResponse(
        {
            "name": "Preview Relay",
            "version": __version__,
            "description": "Wrap Substack links for better link previews",
            "base_url": app_settings.get_base_url(),
            "endpoints": {
                "redirect": "/pub/{publisher}/p/{post_slug}",
                "debug": "/api/debug?url=",
                "wrap": "/api/wrap?url=",
                "mcp": "/mcp",
                "health": "/health",
                "ready": "/ready",
                "alive": "/alive",
            },
            "tools": [
                "inspect_metadata",
                "wrap_link",
                "plan_redirect",
            ],
        }
    )


def create_app(app_settings: Settings | None = None) -> Starlette:
    """
    Build the ASGI application.

    Args:
        app_settings: Settings to run with, defaults to the environment settings

    Returns:
        Configured Starlette application
    """
    app_settings = app_settings or settings
    mcp = create_mcp(app_settings)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        """
        Application lifespan manager.

        Opens the shared fetch resources on startup, closes them on shutdown.
        """
        logger.info(
            "starting_http_server",
            host=app_settings.host,
            port=app_settings.port,
            debug=app_settings.debug,
        )

        async with open_preview_context(app_settings) as context:
            app.state.preview = context
            # MCP server has its own lifespan, managed via session_manager
            async with mcp.session_manager.run():
                yield

        logger.info("http_server_shutdown")

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=app_settings.get_cors_origins(),
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Mcp-Session-Id"],  # Required for MCP sessions
        ),
    ]

    app = Starlette(
        debug=app_settings.debug,
        routes=[
            Route("/", root, methods=["GET"]),
            # Wrapped links
            Route("/pub/{publisher}/p/{post_slug}", redirect_page, methods=["GET"]),
            # JSON API
            Route("/api/debug", debug_metadata, methods=["GET"]),
            Route("/api/wrap", wrap_link, methods=["GET"]),
            # Health endpoints
            Route("/health", health_check, methods=["GET"]),
            Route("/ready", readiness_check, methods=["GET"]),
            Route("/alive", liveness_check, methods=["GET"]),
            # MCP endpoint - Streamable HTTP
            Mount("/mcp", app=mcp.streamable_http_app()),
        ],
        middleware=middleware,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    return app


app = create_app()
