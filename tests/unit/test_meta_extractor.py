"""Unit tests for preview metadata extraction."""

import pytest

from preview_relay.models.document import FetchFailure, RemoteDocument
from preview_relay.models.metadata import (
    DEFAULT_DESCRIPTION,
    DEFAULT_TITLE,
    FieldSpec,
)
from preview_relay.utils.meta_extractor import (
    extract,
    extract_field,
    field_patterns,
    matched_fields,
    resolve_metadata,
    sample_meta_tags,
)

TITLE = FieldSpec(field="title", primary_key="og:title", fallback_key="twitter:title")


class TestExtractField:
    """Tests for single-field pattern matching."""

    @pytest.mark.parametrize(
        "tag",
        [
            '<meta property="og:title" content="V">',
            "<meta property='og:title' content='V'>",
            '<meta content="V" property="og:title">',
            "<meta content='V' property='og:title'>",
            '<meta property="og:title" data-rh="true" id="t" content="V">',
            '<meta content="V" data-rh="true" property="og:title" />',
            '<META PROPERTY="OG:TITLE" CONTENT="V">',
            '<meta\n  property="og:title"\n  content="V"\n>',
            '<meta property = "og:title" content = "  V  ">',
        ],
    )
    def test_title_variants(self, tag):
        """Attribute order, quoting, casing and line breaks do not matter."""
        assert extract_field(f"<head>{tag}</head>", TITLE) == "V"

    def test_twitter_fallback_when_og_missing(self):
        html = '<meta name="twitter:title" content="From Twitter">'
        assert extract_field(html, TITLE) == "From Twitter"

    def test_twitter_fallback_reversed(self):
        html = '<meta content="From Twitter" name="twitter:title">'
        assert extract_field(html, TITLE) == "From Twitter"

    def test_og_preferred_over_twitter(self):
        html = (
            '<meta name="twitter:title" content="Twitter">'
            '<meta property="og:title" content="OG">'
        )
        assert extract_field(html, TITLE) == "OG"

    def test_fallback_key_not_used_without_spec(self):
        spec = FieldSpec(field="title", primary_key="og:title")
        html = '<meta name="twitter:title" content="Twitter">'
        assert extract_field(html, spec) is None

    def test_name_attribute_not_used_for_primary_key(self):
        spec = FieldSpec(field="title", primary_key="og:title")
        assert extract_field('<meta name="og:title" content="X">', spec) is None

    def test_empty_value_falls_through_to_next_pattern(self):
        html = (
            '<meta property="og:title" content="   ">'
            '<meta name="twitter:title" content="Twitter">'
        )
        assert extract_field(html, TITLE) == "Twitter"

    def test_empty_tag_does_not_hide_later_tag(self):
        html = '<meta property="og:title" content=""><meta property="og:title" content="Real">'
        assert extract_field(html, TITLE) == "Real"

    def test_later_primary_tag_beats_fallback(self):
        html = (
            '<meta property="og:title" content=" ">'
            '<meta name="twitter:title" content="Twitter">'
            '<meta property="og:title" content="OG">'
        )
        assert extract_field(html, TITLE) == "OG"

    def test_apostrophe_inside_double_quotes(self):
        html = """<meta property="og:title" content="Alice's post">"""
        assert extract_field(html, TITLE) == "Alice's post"

    def test_entities_are_decoded(self):
        html = '<meta property="og:title" content="Tom &amp; Jerry &#8217;s">'
        assert extract_field(html, TITLE) == "Tom & Jerry ’s"

    def test_colon_is_literal(self):
        """A key like og:title must not match og-title or ogXtitle."""
        html = '<meta property="ogXtitle" content="Wrong"><meta property="og-title" content="Wrong">'
        assert extract_field(html, TITLE) is None

    def test_prefixed_attribute_is_not_property(self):
        html = '<meta data-property="og:title" content="Wrong">'
        assert extract_field(html, TITLE) is None

    def test_does_not_cross_tag_boundary(self):
        html = '<meta property="og:title"><meta content="Other" name="description">'
        assert extract_field(html, TITLE) is None

    def test_empty_document(self):
        assert extract_field("", TITLE) is None

    def test_patterns_ordered_and_cached(self):
        patterns = field_patterns(TITLE)
        assert len(patterns) == 4
        assert field_patterns(TITLE) is patterns
        assert len(field_patterns(FieldSpec(field="x", primary_key="og:x"))) == 2


class TestExtract:
    """Tests for full metadata extraction."""

    def test_substack_page(self, substack_html):
        metadata = extract(substack_html, source_url="https://upstream/pub/alice/p/hello-world")

        assert metadata.title == "Hello World"
        assert metadata.description == "A post about saying hello."
        assert metadata.image == "https://substackcdn.com/image/fetch/hello.png"
        assert metadata.image_width == 1200
        assert metadata.image_height == 630
        assert metadata.site_name == "Alice's Newsletter"
        assert metadata.card_type == "summary_large_image"
        assert metadata.source_url == "https://upstream/pub/alice/p/hello-world"

    def test_missing_fields_use_fallbacks(self):
        metadata = extract("<html><head><title>Nothing</title></head></html>")

        assert metadata.title == DEFAULT_TITLE
        assert metadata.description == DEFAULT_DESCRIPTION
        assert metadata.image is None
        assert metadata.site_name is None
        assert metadata.card_type is None
        assert metadata.image_width is None

    def test_twitter_only_page(self):
        html = (
            '<meta name="twitter:title" content="V">'
            '<meta name="twitter:description" content="D">'
            '<meta name="twitter:image" content="https://img/x.png">'
        )
        metadata = extract(html)
        assert metadata.title == "V"
        assert metadata.description == "D"
        assert metadata.image == "https://img/x.png"
        assert metadata.card_type is None

    def test_non_numeric_dimensions_ignored(self):
        html = '<meta property="og:image:width" content="wide">'
        assert extract(html).image_width is None

    def test_custom_specs_only(self):
        specs = [FieldSpec(field="site_name", primary_key="og:site_name")]
        html = '<meta property="og:site_name" content="Site"><meta property="og:title" content="T">'
        metadata = extract(html, specs)
        assert metadata.site_name == "Site"
        assert metadata.title == DEFAULT_TITLE

    def test_matched_fields(self, substack_html):
        fields = matched_fields(substack_html)
        assert "title" in fields
        assert "card_type" in fields
        assert matched_fields("<p>no tags</p>") == []


class TestSampleMetaTags:
    """Tests for raw meta tag sampling."""

    def test_limit(self):
        html = "".join(f'<meta name="k{i}" content="{i}">' for i in range(30))
        sample = sample_meta_tags(html, limit=20)
        assert len(sample) == 20
        assert sample[0] == '<meta name="k0" content="0">'

    def test_no_tags(self):
        assert sample_meta_tags("<p>plain</p>") == []
        assert sample_meta_tags("", limit=5) == []
        assert sample_meta_tags('<meta a="1">', limit=0) == []


class TestResolveMetadata:
    """Tests for the degrade-on-failure step."""

    def test_document(self, substack_html):
        document = RemoteDocument(
            url="https://upstream/pub/alice/p/hello-world",
            final_url="https://alice.substack.com/p/hello-world",
            status_code=200,
            body=substack_html,
        )
        result = resolve_metadata(document)

        assert result.degraded is False
        assert result.failure is None
        assert result.metadata.title == "Hello World"
        assert result.metadata.source_url == "https://upstream/pub/alice/p/hello-world"
        assert "title" in result.matched_fields

    def test_failure_degrades_to_fallback(self):
        failure = FetchFailure.timeout("https://upstream/pub/alice/p/x", 10)
        result = resolve_metadata(failure, source_url="https://upstream/pub/alice/p/x")

        assert result.degraded is True
        assert result.failure == failure
        assert result.metadata.title == DEFAULT_TITLE
        assert result.metadata.description == DEFAULT_DESCRIPTION
        assert result.metadata.source_url == "https://upstream/pub/alice/p/x"
