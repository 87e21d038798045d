"""Parsing Substack post URLs and wrapping them onto this service."""

from urllib.parse import quote, urlparse

from preview_relay.exceptions import InvalidURLError, UnsupportedLinkError
from preview_relay.models.diagnostic import WrappedLink
from preview_relay.models.redirect import RouteParams

DEFAULT_UPSTREAM_HOST = "open.substack.com"


def validate_url(url: str | None) -> str:
    """
    Check that a URL is an absolute http(s) URL.

    Raises:
        InvalidURLError: If the URL is empty, relative or not http(s)
    """
    url = (url or "").strip()
    if not url:
        raise InvalidURLError("", "URL is empty")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidURLError(url)
    return url


def parse_post_url(url: str, upstream_host: str = DEFAULT_UPSTREAM_HOST) -> RouteParams:
    """
    Extract the publisher and post slug from a Substack post URL.

    Accepted shapes:
        https://open.substack.com/pub/<publisher>/p/<slug>
        https://<publisher>.substack.com/p/<slug>

    Args:
        url: Pasted post URL
        upstream_host: Host of the shared post domain

    Returns:
        RouteParams without a query string

    Raises:
        InvalidURLError: If the URL cannot be parsed
        UnsupportedLinkError: If the URL is not a Substack post link
    """
    url = validate_url(url)
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    upstream_host = upstream_host.lower()
    parts = [part for part in parsed.path.split("/") if part]

    # open.substack.com -> substack.com
    platform_domain = upstream_host.split(".", 1)[1] if upstream_host.count(".") > 1 else upstream_host

    publisher = post_slug = ""
    if host == upstream_host:
        if len(parts) >= 4 and parts[0] == "pub" and parts[2] == "p":
            publisher, post_slug = parts[1], parts[3]
    elif host.endswith(f".{platform_domain}") and host != f"www.{platform_domain}":
        if len(parts) >= 2 and parts[0] == "p":
            publisher = host[: -len(platform_domain) - 1].split(".")[-1]
            post_slug = parts[1]
    else:
        raise UnsupportedLinkError(url)

    if not publisher or not post_slug:
        raise UnsupportedLinkError(url)

    return RouteParams(publisher=publisher, post_slug=post_slug)


def wrap_post_url(
    url: str,
    base_url: str,
    upstream_host: str = DEFAULT_UPSTREAM_HOST,
) -> WrappedLink:
    """
    Rewrite a Substack post URL onto this service's own domain.

    Args:
        url: Pasted post URL
        base_url: Public base URL of this service
        upstream_host: Host of the shared post domain

    Returns:
        WrappedLink with the new URL and its route parts
    """
    route = parse_post_url(url, upstream_host)
    wrapped = (
        f"{base_url.rstrip('/')}/pub/{quote(route.publisher, safe='')}"
        f"/p/{quote(route.post_slug, safe='')}"
    )
    return WrappedLink(wrapped_url=wrapped, publisher=route.publisher, post_slug=route.post_slug)
