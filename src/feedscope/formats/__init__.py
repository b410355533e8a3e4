"""Feed schemas and document-level helpers.

Key Components:
    rss.RssIter: Pull iterator over an RSS channel
    atom.AtomIter: Pull iterator over an Atom feed
    opml.OpmlIter: Pull iterator over OPML head metadata and outlines
    detect_type: Document type detection from the first significant token
    iter_feed_links: Feed link discovery in HTML pages
"""

from . import atom, opml, rss
from .atom import AtomIter
from .detect import FeedType, detect_type
from .discovery import BaseUrl, FeedUrl, iter_feed_links
from .opml import OpmlIter
from .rss import RssIter

__all__ = [
    "AtomIter",
    "BaseUrl",
    "FeedType",
    "FeedUrl",
    "OpmlIter",
    "RssIter",
    "atom",
    "detect_type",
    "iter_feed_links",
    "opml",
    "rss",
]
