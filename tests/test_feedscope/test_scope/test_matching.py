"""Tests for tag matching, content reading and the shared cursor."""

import pytest

from feedscope.scope import Content, Cursor, ScopeBoundary, find_matching_end, read_content
from feedscope.tokenization import Reader


def match_after_first_tag(text, local_name, limit=None):
    reader = Reader(text)
    start_tag = reader.tokenize(0)
    return reader, find_matching_end(reader, start_tag.end, local_name, limit)


class TestFindMatchingEnd:
    """Test depth-counted end tag resolution."""

    def test_simple_match(self):
        """Test the first end tag of the same name closes the element."""
        text = "<item><title>t</title></item>"
        reader, boundary = match_after_first_tag(text, "item")
        assert boundary.terminated
        assert text[boundary.close_start:boundary.close_end] == "</item>"
        assert boundary.close_end == len(text)

    def test_nested_same_name(self):
        """Test nested same-named tags are skipped by depth counting."""
        text = "<div><div>inner</div>outer</div><div>next</div>"
        _, boundary = match_after_first_tag(text, "div")
        assert boundary.close_end == text.index("<div>next")

    def test_prefix_is_ignored(self):
        """Test an end tag with a different prefix still matches."""
        text = "<atom:link>x</link>"
        _, boundary = match_after_first_tag(text, "link")
        assert boundary.terminated
        assert boundary.close_start == text.index("</link>")

    def test_prefixed_nested_counts(self):
        """Test prefixed nested opens increment the counter."""
        text = "<a><x:a></x:a></a>"
        _, boundary = match_after_first_tag(text, "a")
        assert boundary.close_start == len(text) - len("</a>")

    def test_self_closing_does_not_count(self):
        """Test self-closing tags of the same name are ignored."""
        text = "<outline><outline/></outline>"
        _, boundary = match_after_first_tag(text, "outline")
        assert boundary.close_end == len(text)

    def test_case_insensitive(self):
        """Test end tags match regardless of ASCII case."""
        text = "<pubDate>x</PUBDATE>"
        _, boundary = match_after_first_tag(text, "pubDate")
        assert boundary.terminated

    def test_unterminated_collapses_to_end(self):
        """Test a missing end tag yields an unterminated boundary at end of input."""
        text = "<item><title>t</title>"
        _, boundary = match_after_first_tag(text, "item")
        assert not boundary.terminated
        assert boundary.close_start == boundary.close_end == len(text)

    def test_search_stops_at_limit(self):
        """Test the search never crosses the enclosing boundary."""
        text = "<a>x</b><a>y</a>"
        limit = text.index("<a>y")
        _, boundary = match_after_first_tag(text, "a", limit=limit)
        assert not boundary.terminated
        assert boundary.close_start == limit


class TestReadContent:
    """Test leaf content extraction."""

    def _content(self, text, decode_entities=True):
        reader = Reader(text)
        start_tag = reader.tokenize(0)
        boundary = find_matching_end(reader, start_tag.end, start_tag.name.local)
        return read_content(reader, start_tag.end, boundary.close_start, decode_entities)

    def test_text_is_entity_decoded(self):
        """Test character and entity references are decoded."""
        content = self._content("<title>Tom &amp; Jerry &#8217;s</title>")
        assert content.text == "Tom & Jerry ’s"
        assert content.raw == "Tom &amp; Jerry &#8217;s"

    def test_cdata_is_verbatim(self):
        """Test CDATA sections are taken as is."""
        content = self._content("<description><![CDATA[<p>a &amp; b</p>]]></description>")
        assert content.text == "<p>a &amp; b</p>"

    def test_nested_markup_is_inert(self):
        """Test nested tags contribute only their text."""
        content = self._content("<title>Hello <b>big</b> world</title>")
        assert content.text == "Hello big world"
        assert content.raw == "Hello <b>big</b> world"

    def test_textual_tag_names_do_not_close(self):
        """Test a nested same-named tag inside content stays inside."""
        content = self._content("<title>a<title>b</title>c</title>")
        assert content.text == "abc"

    def test_empty_content(self):
        """Test an element with no text yields an empty string."""
        assert self._content("<title></title>").text == ""

    def test_decoding_can_be_disabled(self):
        """Test entities are kept when decoding is off."""
        assert self._content("<t>a &amp; b</t>", decode_entities=False).text == "a &amp; b"

    def test_bare_less_than_is_kept(self):
        """Test a stray '<' in text is kept and reported."""
        reader = Reader("<title>a < b &amp; c</title>")
        start_tag = reader.tokenize(0)
        boundary = find_matching_end(reader, start_tag.end, "title")
        kept = []
        content = read_content(reader, start_tag.end, boundary.close_start, on_malformed=kept.append)
        assert content.text == "a < b & c"
        assert [token.source for token in kept] == ["< b &amp; c"]


class TestContent:
    """Test the content value object."""

    def test_lazy_materialization(self):
        """Test text is built on first access."""
        content = Content("<t>abc</t>", [(3, 6, True)], 3, 6)
        assert not content.is_materialized
        assert content == "abc"
        assert content.is_materialized

    def test_materialize_returns_self(self):
        """Test eager materialization."""
        content = Content("<t>abc</t>", [(3, 6, True)], 3, 6)
        assert content.materialize() is content
        assert str(content) == "abc"


class TestCursor:
    """Test the forward-only cursor and boundaries."""

    def test_cursor_only_moves_forward(self):
        """Test advance_to ignores positions behind the cursor."""
        cursor = Cursor()
        assert cursor.advance_to(5)
        assert not cursor.advance_to(3)
        assert cursor.pos == 5

    def test_negative_cursor(self):
        """Test negative positions are rejected."""
        with pytest.raises(ValueError):
            Cursor(-1)

    def test_boundary_validation(self):
        """Test boundary offsets are validated."""
        with pytest.raises(ValueError, match="close_start <= close_end"):
            ScopeBoundary(5, 3)

    def test_boundary_presets(self):
        """Test empty and open-ended boundaries."""
        assert ScopeBoundary.empty(4) == ScopeBoundary(4, 4, True)
        assert not ScopeBoundary.open_ended(10).terminated
