"""Tests for the per-entry overview listing."""

from __future__ import annotations

import pytest

from haricot.analysis.overview import (
    build_overview,
    cut_text,
    render_overview,
    strip_query,
)
from haricot.index import EntryIndex

# fmt: off
CUT_TEXT_CASES = [
    ("short",                  80,  "short",               "short_text"),
    ("a" * 100,                80,  "a" * 80,              "truncated"),
    ("line1\nline2",           80,  "line1\\nline2",       "newline_escaped"),
    ("a\tb\rc",                80,  "a\\tb\\rc",           "tab_cr_escaped"),
    ("   padded   ",           80,  "padded",              "trimmed"),
    ("",                       80,  "",                    "empty"),
]

STRIP_QUERY_CASES = [
    ("http://example.com/a?b=1",         "http://example.com/a",         "query_removed"),
    ("http://example.com/a?b=1#frag",    "http://example.com/a#frag",    "fragment_kept"),
    ("https://example.com:8443/x",       "https://example.com:8443/x",   "no_query"),
]
# fmt: on


class TestCutText:
    """Tests for preview text shortening."""

    @pytest.mark.parametrize(
        ("text", "max_len", "expected", "desc"),
        CUT_TEXT_CASES,
        ids=[c[3] for c in CUT_TEXT_CASES],
    )
    def test_cut_text(self, text: str, max_len: int, expected: str, desc: str) -> None:
        """Test text is cut, escaped and trimmed."""
        assert cut_text(text, max_len) == expected, desc


class TestStripQuery:
    """Tests for URL query removal."""

    @pytest.mark.parametrize(
        ("url", "expected", "desc"),
        STRIP_QUERY_CASES,
        ids=[c[2] for c in STRIP_QUERY_CASES],
    )
    def test_strip_query(self, url: str, expected: str, desc: str) -> None:
        """Test the query string is removed from URLs."""
        assert strip_query(url) == expected, desc


class TestBuildOverview:
    """Tests for build_overview()."""

    def test_one_view_per_entry(self, sample_index: EntryIndex) -> None:
        """Test views are produced in document order."""
        views = build_overview(sample_index)

        assert [v.ordinal for v in views] == [0, 1, 2]
        assert [v.status for v in views] == [200, 404, 200]

    def test_query_string_removed_by_default(self, sample_index: EntryIndex) -> None:
        """Test URLs are shown without query but params are still listed."""
        view = build_overview(sample_index)[0]

        assert view.url == "http://example.com/index.html"
        assert [(q.name, q.value) for q in view.query] == [("lang", "en")]

    def test_with_query_string(self, sample_index: EntryIndex) -> None:
        """Test the full URL is kept on request."""
        view = build_overview(sample_index, with_query_string=True)[0]
        assert view.url == "http://example.com/index.html?lang=en"

    def test_headers_sorted_and_excluded(self, index_for, make_entry) -> None:
        """Test headers are sorted by name and exclusions are case-insensitive."""
        headers = [
            {"name": "User-Agent", "value": "curl"},
            {"name": "Accept", "value": "*/*"},
            {"name": "X-Custom", "value": "1"},
        ]
        index = index_for([make_entry(headers=headers)])

        all_headers = build_overview(index)[0].request_headers
        filtered = build_overview(index, header_excludes=["user-agent"])[0].request_headers

        assert [h.name for h in all_headers] == ["Accept", "User-Agent", "X-Custom"]
        assert [h.name for h in filtered] == ["Accept", "X-Custom"]

    def test_query_excludes(self, index_for, make_entry) -> None:
        """Test excluded query parameters are dropped."""
        query = [{"name": "_", "value": "123"}, {"name": "id", "value": "7"}]
        index = index_for([make_entry(query_string=query)])

        view = build_overview(index, query_excludes=["_"])[0]

        assert [q.name for q in view.query] == ["id"]

    def test_body_previews(self, sample_index: EntryIndex) -> None:
        """Test request and response previews."""
        views = build_overview(sample_index, preview_length=5)

        assert views[0].request_body is None
        assert views[1].request_body is not None
        assert views[1].request_body.preview == '{"use'
        assert views[1].response_body is not None
        assert views[1].response_body.length == 12
        assert views[2].response_body is not None
        assert views[2].response_body.length is None

    def test_base64_preview_not_decoded(self, index_for, make_entry) -> None:
        """Test base64 bodies are described rather than shown."""
        index = index_for([make_entry(text="aGVsbG8=", encoding="base64")])
        preview = build_overview(index)[0].response_body

        assert preview is not None
        assert preview.preview == "<base64, 8 characters>"


class TestRenderOverview:
    """Tests for render_overview()."""

    def test_render_sample(self, sample_index: EntryIndex) -> None:
        """Test the rendered text contains every entry."""
        text = render_overview(sample_index.document, build_overview(sample_index))
        lines = text.splitlines()

        assert lines[0] == "3 entries"
        assert lines[1] == "Created by test 1.0"
        assert "0/ GET http://example.com/index.html" in lines
        assert "1/ POST http://example.com/api/login" in lines
        assert "1/ RESPONSE: 404 OK" in lines
        assert "    Query String:" in lines
        assert "    Post Data:" in lines

    def test_name_value_alignment(self, index_for, make_entry) -> None:
        """Test names are padded to a fixed column."""
        index = index_for([make_entry(headers=[{"name": "Accept", "value": "*/*"}])])
        text = render_overview(index.document, build_overview(index))

        assert "        Accept:              */*" in text.splitlines()

    def test_empty_document(self, index_for) -> None:
        """Test an empty document renders only the header."""
        index = index_for([])
        assert render_overview(index.document, build_overview(index)).splitlines()[0] == "0 entries"
