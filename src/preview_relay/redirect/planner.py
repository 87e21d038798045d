"""Redirect planning for wrapped Substack links."""

from urllib.parse import quote

from preview_relay.models.redirect import ClientContext, RedirectPlan, RouteParams

DEFAULT_UPSTREAM_BASE_URL = "https://open.substack.com"

# Crawlers that only read static markup need time to capture the head
BOT_GRACE_SECONDS = 5
HUMAN_DELAY_SECONDS = 0
# Lets the page paint before the script navigates
SCRIPT_DELAY_MS = 100


def build_upstream_url(route: RouteParams, upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL) -> str:
    """
    Build the canonical upstream post URL for a route.

    The raw query string is appended verbatim, keeping order and duplicates.

    Args:
        route: Publisher, post slug and query
        upstream_base_url: Scheme and host of the upstream site

    Returns:
        Absolute upstream URL
    """
    base = upstream_base_url.rstrip("/")
    publisher = quote(route.publisher, safe="")
    post_slug = quote(route.post_slug, safe="")
    url = f"{base}/pub/{publisher}/p/{post_slug}"
    if route.query:
        url = f"{url}?{route.query}"
    return url


def plan(
    route: RouteParams,
    classification: ClientContext,
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL,
) -> RedirectPlan:
    """
    Decide how the redirect page sends the client upstream.

    Automated clients get a delayed declarative refresh and no script. Human
    visitors get an immediate refresh plus a script-driven replace that acts
    first when scripting is enabled.

    Args:
        route: Validated route parameters
        classification: Result of classifying the requester
        upstream_base_url: Scheme and host of the upstream site

    Returns:
        RedirectPlan for the response
    """
    automated = classification.is_automated
    return RedirectPlan(
        target_url=build_upstream_url(route, upstream_base_url),
        delay_seconds=BOT_GRACE_SECONDS if automated else HUMAN_DELAY_SECONDS,
        emit_script=not automated,
        script_delay_ms=SCRIPT_DELAY_MS,
    )
