"""
Request pipeline for wrapped links and metadata diagnostics.

The redirect plan is computed from the route and the requester alone; the
fetched metadata only annotates the page head, so an upstream failure changes
what a crawler previews but never where a visitor ends up.
"""

from dataclasses import dataclass

import structlog

from preview_relay.fetchers.base import DocumentFetcher
from preview_relay.models.diagnostic import DiagnosticDebug, DiagnosticReport, ErrorResponse
from preview_relay.models.document import FailureKind, FetchFailure
from preview_relay.models.metadata import MetadataResult
from preview_relay.models.redirect import ClientContext, RedirectPlan, RouteParams
from preview_relay.redirect.classifier import classify
from preview_relay.redirect.page import render_redirect_page
from preview_relay.redirect.planner import DEFAULT_UPSTREAM_BASE_URL, build_upstream_url, plan
from preview_relay.utils.meta_extractor import resolve_metadata, sample_meta_tags

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RedirectOutcome:
    """Everything decided for one redirect request."""

    metadata: MetadataResult
    client: ClientContext
    plan: RedirectPlan
    html: str


async def fetch_metadata(
    fetcher: DocumentFetcher,
    route: RouteParams,
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL,
) -> MetadataResult:
    """
    Fetch the upstream post and extract its preview metadata.

    The post is fetched without the visitor's query string.

    Args:
        fetcher: Document fetcher
        route: Validated route parameters
        upstream_base_url: Scheme and host of the upstream site

    Returns:
        MetadataResult, with fallback metadata if the fetch failed
    """
    post_url = build_upstream_url(
        RouteParams(publisher=route.publisher, post_slug=route.post_slug),
        upstream_base_url,
    )
    result = await fetcher.fetch(post_url)
    return resolve_metadata(result, source_url=post_url)


async def prepare_redirect(
    fetcher: DocumentFetcher,
    route: RouteParams,
    user_agent: str | None,
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL,
) -> RedirectOutcome:
    """
    Build the redirect page for a wrapped link.

    Args:
        fetcher: Document fetcher
        route: Validated route parameters
        user_agent: Raw User-Agent header of the requester
        upstream_base_url: Scheme and host of the upstream site

    Returns:
        RedirectOutcome with the rendered HTML
    """
    client = classify(user_agent)
    redirect_plan = plan(route, client, upstream_base_url)
    metadata = await fetch_metadata(fetcher, route, upstream_base_url)

    logger.info(
        "redirect_planned",
        publisher=route.publisher,
        post_slug=route.post_slug,
        automated=client.is_automated,
        delay_seconds=redirect_plan.delay_seconds,
        degraded=metadata.degraded,
    )

    return RedirectOutcome(
        metadata=metadata,
        client=client,
        plan=redirect_plan,
        html=render_redirect_page(metadata.metadata, redirect_plan),
    )


async def inspect_url(
    fetcher: DocumentFetcher,
    url: str,
    sample_size: int = 20,
) -> DiagnosticReport | FetchFailure:
    """
    Show what the extractor finds at an arbitrary URL.

    Args:
        fetcher: Document fetcher
        url: URL to inspect
        sample_size: Number of raw meta tags to include

    Returns:
        DiagnosticReport on success, the FetchFailure otherwise
    """
    result = await fetcher.fetch(url)
    if isinstance(result, FetchFailure):
        return result

    resolved = resolve_metadata(result, source_url=url)
    return DiagnosticReport(
        success=True,
        metadata=resolved.metadata,
        html_length=len(result.body),
        debug=DiagnosticDebug(
            sample_meta_tags=sample_meta_tags(result.body, sample_size),
            matched_fields=resolved.matched_fields,
        ),
    )


def failure_response(failure: FetchFailure) -> tuple[ErrorResponse, int]:
    """
    Map a fetch failure to the diagnostic error body and HTTP status.

    Upstream error statuses are passed through; timeouts become 504 and
    transport errors 502.
    """
    if failure.kind is FailureKind.HTTP_STATUS and failure.status_code is not None:
        status = failure.status_code if failure.status_code >= 400 else 502
        return ErrorResponse(error=f"Failed to fetch: {failure.status_code}"), status

    status = 504 if failure.kind is FailureKind.TIMEOUT else 502
    return ErrorResponse(error="Failed to fetch metadata", details=failure.message), status
