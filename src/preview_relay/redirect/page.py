"""HTML rendering of the redirect page."""

import json
from html import escape

from preview_relay.models.metadata import ExtractedMetadata
from preview_relay.models.redirect import RedirectPlan


def _meta(attribute: str, key: str, value: object) -> str:
    return f'  <meta {attribute}="{key}" content="{escape(str(value))}"/>'


def _js_string(value: str) -> str:
    # JSON string literal that cannot close the surrounding <script> element
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def card_type_for(metadata: ExtractedMetadata) -> str:
    """Twitter card type to declare for the metadata."""
    if metadata.card_type:
        return metadata.card_type
    return "summary_large_image" if metadata.image else "summary"


def preview_meta_tags(metadata: ExtractedMetadata, plan: RedirectPlan) -> list[str]:
    """Open Graph and Twitter card tags mirroring the extracted metadata."""
    tags = [
        _meta("name", "description", metadata.description),
        _meta("property", "og:type", "article"),
        _meta("property", "og:title", metadata.title),
        _meta("property", "og:description", metadata.description),
        _meta("property", "og:url", plan.target_url),
    ]
    if metadata.site_name:
        tags.append(_meta("property", "og:site_name", metadata.site_name))
    if metadata.image:
        tags.append(_meta("property", "og:image", metadata.image))
        if metadata.image_width is not None:
            tags.append(_meta("property", "og:image:width", metadata.image_width))
        if metadata.image_height is not None:
            tags.append(_meta("property", "og:image:height", metadata.image_height))

    tags.extend(
        [
            _meta("name", "twitter:card", card_type_for(metadata)),
            _meta("name", "twitter:title", metadata.title),
            _meta("name", "twitter:description", metadata.description),
        ]
    )
    if metadata.image:
        tags.append(_meta("name", "twitter:image", metadata.image))
    return tags


def render_redirect_page(metadata: ExtractedMetadata, plan: RedirectPlan) -> str:
    """
    Render the redirect page for a wrapped link.

    The head carries the preview metadata and the refresh directive. The body
    holds the navigation script (human visitors only) and a visible link for
    clients that act on neither.

    Args:
        metadata: Preview metadata for the head
        plan: Redirect plan deciding timing and mechanisms

    Returns:
        Complete HTML document
    """
    target = escape(plan.target_url)
    head = "\n".join(preview_meta_tags(metadata, plan))

    script = ""
    if plan.emit_script:
        script = (
            "\n  <script>setTimeout(function () { window.location.replace("
            f"{_js_string(plan.target_url)}); }}, {plan.script_delay_ms});</script>"
        )

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <title>{escape(metadata.title)}</title>
{head}
  <link rel="canonical" href="{target}"/>
  <meta http-equiv="refresh" content="{escape(plan.refresh_directive)}"/>
</head>
<body style="margin:0;min-height:100vh;display:flex;align-items:center;justify-content:center;font-family:system-ui,-apple-system,sans-serif;color:#666">
  <main style="text-align:center">
    <p style="font-size:24px;margin-bottom:12px">Redirecting to Substack...</p>
    <a href="{target}" style="color:#ff6719;text-decoration:none">Click here if not redirected automatically</a>
  </main>{script}
</body>
</html>
"""
