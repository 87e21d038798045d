"""User-agent classification for link-preview crawlers."""

from preview_relay.models.redirect import ClientContext

# Lowercase substrings identifying crawlers and link-preview fetchers.
# Past the generic bot words only named fetchers are listed; "preview" alone
# appears in browser UAs and is not a token.
AUTOMATED_AGENT_TOKENS: tuple[str, ...] = (
    # Generic
    "bot",
    "crawler",
    "crawling",
    "spider",
    "headlesschrome",
    # Social and messaging preview fetchers
    "facebookexternalhit",
    "facebot",
    "twitterbot",
    "linkedinbot",
    "slackbot",
    "slack-imgproxy",
    "discordbot",
    "telegrambot",
    "whatsapp",
    "skypeuripreview",
    "pinterest",
    "redditbot",
    "embedly",
    "iframely",
    "vkshare",
    "tumblr",
    "bitlybot",
    "mastodon",
    "bluesky",
    "google-inspectiontool",
    "w3c_validator",
)


def is_automated_agent(user_agent: str | None) -> bool:
    """Return True when the user agent contains a known crawler token."""
    if not user_agent:
        return False
    lowered = user_agent.lower()
    return any(token in lowered for token in AUTOMATED_AGENT_TOKENS)


def classify(user_agent: str | None) -> ClientContext:
    """
    Classify the requester from its user-agent string.

    Missing or unrecognised user agents are treated as human visitors.

    Args:
        user_agent: Raw User-Agent header value

    Returns:
        ClientContext for the request
    """
    return ClientContext(
        user_agent=user_agent or "",
        is_automated=is_automated_agent(user_agent),
    )
