"""Feed discovery in HTML pages.

Scans every tag of a page for ``<link>`` elements that advertise a feed and
for the ``<base>`` element that relative feed URLs resolve against. URLs are
returned as written; resolving them is left to the caller.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from feedscope.tokenization import Attributes, Reader, TokenType

FEED_RELS = frozenset({"alternate", "feed"})
FEED_MEDIA_TYPES = frozenset({"application/rss+xml", "application/atom+xml"})


@dataclass(frozen=True)
class FeedUrl:
    """URL of a feed advertised by a ``<link>`` tag."""

    href: str
    type: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class BaseUrl:
    """URL of the page's ``<base>`` tag."""

    href: str


PageLink = Union[FeedUrl, BaseUrl]


def _feed_link(attributes: Attributes) -> Optional[FeedUrl]:
    href = attributes.get("href")
    if href is None:
        return None

    rel = (attributes.get("rel") or "").strip().lower()
    media_type = (attributes.get("type") or "").strip().lower()
    if rel in FEED_RELS or media_type in FEED_MEDIA_TYPES:
        return FeedUrl(href, attributes.get("type"), attributes.get("title"))
    return None


def iter_feed_links(data: Union[str, bytes, Reader]) -> Iterator[PageLink]:
    """Lazily yield feed links and base URLs in document order.

    Args:
        data: HTML page text, raw bytes or a reader

    Yields:
        ``FeedUrl`` for each qualifying ``<link>``, ``BaseUrl`` for each
        ``<base href>``
    """
    reader = Reader.from_input(data)
    for token in reader.iter_tokens():
        if token.type is not TokenType.START_TAG and token.type is not TokenType.EMPTY_ELEMENT_TAG:
            continue

        name = token.name.qualified.lower()
        if name == "link":
            link = _feed_link(token.attributes)
            if link is not None:
                yield link
        elif name == "base":
            href = token.attributes.get("href")
            if href is not None:
                yield BaseUrl(href)
