"""Bot-aware redirect decisions and rendering."""

from preview_relay.redirect.classifier import classify, is_automated_agent
from preview_relay.redirect.page import render_redirect_page
from preview_relay.redirect.planner import BOT_GRACE_SECONDS, build_upstream_url, plan

__all__ = [
    "classify",
    "is_automated_agent",
    "plan",
    "build_upstream_url",
    "render_redirect_page",
    "BOT_GRACE_SECONDS",
]
