"""Pull-parsing API with progressive disclosure.

Level 1 is a set of module functions (``iter_rss``, ``iter_atom``,
``iter_opml``, ``iter_feed``). Level 2 is ``FeedParser``, which holds one
``FeedParserConfig`` and hands out iterators configured with it.
"""

from typing import Dict, Iterator, Optional, Type, Union

from feedscope.formats import (
    AtomIter,
    FeedType,
    OpmlIter,
    RssIter,
    detect_type,
    iter_feed_links,
)
from feedscope.formats.discovery import PageLink
from feedscope.scope import DocumentIterator
from feedscope.shared import FeedParserConfig, get_logger
from feedscope.tokenization import Reader

InputType = Union[str, bytes, Reader]
FeedIter = Union[RssIter, AtomIter, OpmlIter]

_ITERATORS: Dict[FeedType, Type[DocumentIterator]] = {
    FeedType.RSS: RssIter,
    FeedType.ATOM: AtomIter,
    FeedType.OPML: OpmlIter,
}


class UnsupportedFeedError(ValueError):
    """Raised when a document is not a feed format with a pull iterator."""

    def __init__(self, feed_type: FeedType) -> None:
        super().__init__(f"No pull iterator for document type '{feed_type.value}'")
        self.feed_type = feed_type


def iter_rss(data: InputType, config: Optional[FeedParserConfig] = None) -> RssIter:
    """Pull elements out of an RSS channel.

    Examples:
        >>> channel = iter_rss('<rss><channel><title>T</title></channel></rss>')
        >>> next(channel).content
        'T'
    """
    return RssIter(data, config)


def iter_atom(data: InputType, config: Optional[FeedParserConfig] = None) -> AtomIter:
    """Pull elements out of an Atom feed."""
    return AtomIter(data, config)


def iter_opml(data: InputType, config: Optional[FeedParserConfig] = None) -> OpmlIter:
    """Pull head metadata and outlines out of an OPML document."""
    return OpmlIter(data, config)


def iter_feed(data: InputType, config: Optional[FeedParserConfig] = None) -> FeedIter:
    """Detect the document type and return the matching pull iterator.

    Args:
        data: Document text, raw bytes or a reader
        config: Optional parser configuration

    Returns:
        ``RssIter``, ``AtomIter`` or ``OpmlIter``

    Raises:
        UnsupportedFeedError: If the document is JSON, HTML, other markup or empty
        FeedEncodingError: If bytes cannot be decoded
    """
    config = config or FeedParserConfig()
    logger = get_logger(__name__, config.correlation_id, "iter_feed")

    reader = Reader.from_input(data)
    feed_type = detect_type(reader)
    iterator_class = _ITERATORS.get(feed_type)
    if iterator_class is None:
        logger.info("Document is not a supported feed", extra={"feed_type": feed_type.value})
        raise UnsupportedFeedError(feed_type)

    logger.debug(
        "Detected feed type",
        extra={"feed_type": feed_type.value, "input_length": len(reader)},
    )
    return iterator_class(reader, config)


class FeedParser:
    """Configured entry point producing pull iterators.

    Examples:
        >>> parser = FeedParser(FeedParserConfig.zero_copy())
        >>> for element in parser.feed(text):
        ...     print(element.name)
    """

    def __init__(self, config: Optional[FeedParserConfig] = None) -> None:
        self.config = config or FeedParserConfig()

    def rss(self, data: InputType) -> RssIter:
        """Pull iterator over an RSS channel."""
        return iter_rss(data, self.config)

    def atom(self, data: InputType) -> AtomIter:
        """Pull iterator over an Atom feed."""
        return iter_atom(data, self.config)

    def opml(self, data: InputType) -> OpmlIter:
        """Pull iterator over an OPML document."""
        return iter_opml(data, self.config)

    def feed(self, data: InputType) -> FeedIter:
        """Pull iterator for whichever feed format the document is."""
        return iter_feed(data, self.config)

    def detect(self, data: InputType) -> FeedType:
        """Detect the document type."""
        return detect_type(data)

    def links(self, data: InputType) -> Iterator[PageLink]:
        """Feed links and base URLs advertised by an HTML page."""
        return iter_feed_links(data)

    def __repr__(self) -> str:
        return f"FeedParser(content_mode={self.config.content_mode.value})"
