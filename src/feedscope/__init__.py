"""feedscope.

Pull parsing for RSS, Atom and OPML feeds. Elements are produced one at a
time from a shared cursor; container elements (items, entries, outlines)
are themselves bounded iterators over their own children.

Progressive API Disclosure:
- Level 1: Simple functions - iter_rss(), iter_atom(), iter_opml(), iter_feed()
- Level 2: Configured parser - FeedParser class with FeedParserConfig
- Level 3: Scope iterators - ScopeIterator / DocumentIterator subclasses
"""

__version__ = "0.1.0"
__author__ = "feedscope developers"

# Level 1: Simple functions
from .api import FeedParser, UnsupportedFeedError, iter_atom, iter_feed, iter_opml, iter_rss
from .character import FeedEncodingError
from .formats import (
    AtomIter,
    BaseUrl,
    FeedType,
    FeedUrl,
    OpmlIter,
    RssIter,
    detect_type,
    iter_feed_links,
)
from .scope import ContainerElement, LeafElement, Unknown
from .shared import ContentMode, FeedParserConfig

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "iter_rss",
    "iter_atom",
    "iter_opml",
    "iter_feed",
    "detect_type",
    "iter_feed_links",

    # Level 2: Configured parser
    "FeedParser",
    "FeedParserConfig",
    "ContentMode",

    # Iterators and element types
    "RssIter",
    "AtomIter",
    "OpmlIter",
    "ContainerElement",
    "LeafElement",
    "Unknown",
    "FeedType",
    "FeedUrl",
    "BaseUrl",

    # Errors
    "FeedEncodingError",
    "UnsupportedFeedError",
]
