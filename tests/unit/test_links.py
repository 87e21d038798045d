"""Unit tests for Substack link parsing and wrapping."""

import pytest

from preview_relay.exceptions import InvalidURLError, UnsupportedLinkError
from preview_relay.utils.links import parse_post_url, validate_url, wrap_post_url


class TestParsePostUrl:
    """Tests for parse_post_url."""

    def test_open_substack_url(self):
        route = parse_post_url("https://open.substack.com/pub/alice/p/hello-world?r=abc")
        assert route.publisher == "alice"
        assert route.post_slug == "hello-world"
        assert route.query == ""

    def test_publication_subdomain_url(self):
        route = parse_post_url("https://alice.substack.com/p/hello-world")
        assert route.publisher == "alice"
        assert route.post_slug == "hello-world"

    def test_host_is_case_insensitive(self):
        route = parse_post_url("https://Alice.Substack.com/p/hello-world/")
        assert route.publisher == "alice"
        assert route.post_slug == "hello-world"

    def test_custom_upstream_host(self):
        route = parse_post_url("https://open.example.org/pub/bob/p/post", upstream_host="open.example.org")
        assert route.publisher == "bob"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/p/hello-world",
            "https://open.substack.com/pub/alice",
            "https://open.substack.com/p/hello-world",
            "https://alice.substack.com/archive",
            "https://www.substack.com/p/hello-world",
        ],
    )
    def test_unsupported_urls(self, url):
        with pytest.raises(UnsupportedLinkError):
            parse_post_url(url)

    @pytest.mark.parametrize("url", ["", "   ", "not a url", "ftp://alice.substack.com/p/x", "/p/x"])
    def test_invalid_urls(self, url):
        with pytest.raises(InvalidURLError):
            parse_post_url(url)


def test_validate_url_strips_whitespace():
    assert validate_url("  https://example.com/a  ") == "https://example.com/a"


def test_wrap_post_url():
    wrapped = wrap_post_url("https://alice.substack.com/p/hello-world", "https://relay.test/")

    assert wrapped.wrapped_url == "https://relay.test/pub/alice/p/hello-world"
    assert wrapped.model_dump(by_alias=True) == {
        "wrappedUrl": "https://relay.test/pub/alice/p/hello-world",
        "publisher": "alice",
        "postSlug": "hello-world",
    }
