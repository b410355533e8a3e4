"""Tests for the progressive parsing API."""

import pytest

import feedscope
from feedscope.api import (
    FeedParser,
    UnsupportedFeedError,
    iter_atom,
    iter_feed,
    iter_opml,
    iter_rss,
)
from feedscope.formats import AtomIter, FeedType, OpmlIter, RssIter, rss
from feedscope.shared import ContentMode, FeedParserConfig

RSS_TEXT = "<rss><channel><title>T</title><item><title>I</title></item></channel></rss>"
ATOM_TEXT = "<feed><title>A</title></feed>"
OPML_TEXT = "<opml><head><title>O</title></head></opml>"


class TestModuleFunctions:
    """Test level 1 functions."""

    def test_format_functions(self):
        """Test each format function returns its iterator."""
        assert isinstance(iter_rss(RSS_TEXT), RssIter)
        assert isinstance(iter_atom(ATOM_TEXT), AtomIter)
        assert isinstance(iter_opml(OPML_TEXT), OpmlIter)
        assert next(iter_opml(OPML_TEXT)).content == "O"

    @pytest.mark.parametrize("text,iterator_class", [
        (RSS_TEXT, RssIter),
        (ATOM_TEXT, AtomIter),
        (OPML_TEXT, OpmlIter),
    ])
    def test_iter_feed_detects(self, text, iterator_class):
        """Test auto-detection picks the matching iterator."""
        assert isinstance(iter_feed(text), iterator_class)

    def test_iter_feed_bytes(self):
        """Test byte input through auto-detection."""
        channel = iter_feed(RSS_TEXT.encode("utf-8"))
        assert next(channel).content == "T"

    @pytest.mark.parametrize("text,feed_type", [
        ('{"items": []}', FeedType.JSON),
        ("<html></html>", FeedType.XML_OR_HTML),
        ("", FeedType.UNKNOWN),
    ])
    def test_iter_feed_unsupported(self, text, feed_type):
        """Test non-feed documents raise UnsupportedFeedError."""
        with pytest.raises(UnsupportedFeedError) as excinfo:
            iter_feed(text)
        assert excinfo.value.feed_type is feed_type
        assert isinstance(excinfo.value, ValueError)

    def test_config_is_passed_through(self):
        """Test the configuration reaches the iterator."""
        config = FeedParserConfig(correlation_id="doc-7", collect_diagnostics=False)
        channel = iter_rss("<rss><channel></x><title>T</title></channel></rss>", config)
        assert [e.content for e in channel] == ["T"]
        assert len(channel.diagnostics) == 0


class TestFeedParser:
    """Test the level 2 configured parser."""

    def test_methods(self):
        """Test the parser hands out configured iterators."""
        parser = FeedParser(FeedParserConfig.zero_copy())
        assert parser.config.content_mode is ContentMode.BORROWED
        assert isinstance(parser.rss(RSS_TEXT), RssIter)
        assert isinstance(parser.atom(ATOM_TEXT), AtomIter)
        assert isinstance(parser.opml(OPML_TEXT), OpmlIter)
        assert parser.detect(ATOM_TEXT) is FeedType.ATOM
        assert repr(parser) == "FeedParser(content_mode=borrowed)"

    def test_feed_items(self):
        """Test end-to-end pulling through the parser."""
        channel = FeedParser().feed(RSS_TEXT)
        title, item = list(channel)
        assert title.content == "T"
        assert isinstance(item, rss.Item)

    def test_links(self):
        """Test feed-link discovery through the parser."""
        links = list(FeedParser().links('<link rel="alternate" href="/f.xml">'))
        assert [link.href for link in links] == ["/f.xml"]


class TestPackageExports:
    """Test the top-level package surface."""

    def test_version(self):
        """Test version metadata."""
        assert feedscope.__version__ == "0.1.0"

    def test_exports(self):
        """Test the documented names are importable from the package."""
        for name in feedscope.__all__:
            assert hasattr(feedscope, name)
        assert feedscope.iter_feed is iter_feed
