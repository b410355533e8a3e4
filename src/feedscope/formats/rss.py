"""RSS schema: channel, item, image, skipHours and skipDays levels.

``RssIter`` enumerates the children of the first ``<channel>`` inside the
``<rss>`` root. Documents whose root is not ``<rss>`` (a bare ``<channel>``,
RSS 1.0 ``<rdf:RDF>``) have the root's children enumerated directly.
"""

from typing import ClassVar, Dict, Optional, Type, Union

from feedscope.scope import (
    ContainerElement,
    DocumentIterator,
    Element,
    LeafElement,
    Unknown,
    attribute_property,
)
from feedscope.shared import FeedParserConfig
from feedscope.tokenization import Token

ROOT_NAME = "rss"
CHANNEL_NAME = "channel"


# Channel leaves

class Title(LeafElement):
    """``<title>`` of a channel, item or image."""


class Link(LeafElement):
    """``<link>`` of a channel, item or image."""


class Description(LeafElement):
    """``<description>`` of a channel, item or image."""


class Language(LeafElement):
    """Language the channel is written in."""


class Copyright(LeafElement):
    """Copyright notice for the channel content."""


class ManagingEditor(LeafElement):
    """E-mail address of the editor."""


class WebMaster(LeafElement):
    """E-mail address of the technical contact."""


class PubDate(LeafElement):
    """``<pubDate>``; the raw date string, not parsed."""


class LastBuildDate(LeafElement):
    """Last time the channel content changed."""


class Category(LeafElement):
    """``<category>`` of a channel or item."""

    domain = attribute_property("domain")


class Generator(LeafElement):
    """Program used to generate the channel."""


class Docs(LeafElement):
    """URL of the format documentation."""


class Cloud(LeafElement):
    """``<cloud>``; an attribute-only element, usually self-closing."""

    domain = attribute_property("domain")
    port = attribute_property("port")
    path = attribute_property("path")
    register_procedure = attribute_property("registerProcedure")
    protocol = attribute_property("protocol")


class Ttl(LeafElement):
    """Minutes the channel may be cached."""


class Rating(LeafElement):
    """PICS rating of the channel."""


class TextInput(LeafElement):
    """``<textInput>``; kept as a leaf, ``raw`` carries its children."""


# Item leaves

class Author(LeafElement):
    """E-mail address of the item author."""


class Comments(LeafElement):
    """URL of the comments page for the item."""


class Enclosure(LeafElement):
    """``<enclosure>``; media attachment described by its attributes."""

    url = attribute_property("url")
    length = attribute_property("length")
    type = attribute_property("type")


class Guid(LeafElement):
    """``<guid>`` of an item."""

    @property
    def is_perma_link(self) -> bool:
        """Value of ``isPermaLink``; the RSS default is true."""
        value = self.get_attribute("isPermaLink")
        if value is None:
            return True
        return value.strip().lower() != "false"


class Source(LeafElement):
    """``<source>`` of an item: the channel the item came from."""

    url = attribute_property("url")


# Image leaves

class Url(LeafElement):
    """URL of the image."""


class Width(LeafElement):
    """Width of the image in pixels."""


class Height(LeafElement):
    """Height of the image in pixels."""


# skipHours / skipDays leaves

class Hour(LeafElement):
    """Hour of the day during which aggregators may skip reading."""


class Day(LeafElement):
    """Day of the week during which aggregators may skip reading."""


# Containers

class Image(ContainerElement):
    """``<image>`` of a channel."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {
        "url": Url,
        "title": Title,
        "link": Link,
        "width": Width,
        "height": Height,
        "description": Description,
    }


class SkipHours(ContainerElement):
    """``<skipHours>``: hours during which aggregators may skip reading."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {"hour": Hour}


class SkipDays(ContainerElement):
    """``<skipDays>``: days during which aggregators may skip reading."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {"day": Day}


class Item(ContainerElement):
    """``<item>``: one story of the channel."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {
        "title": Title,
        "link": Link,
        "description": Description,
        "author": Author,
        "category": Category,
        "comments": Comments,
        "enclosure": Enclosure,
        "guid": Guid,
        "pubdate": PubDate,
        "source": Source,
    }


CHANNEL_CLASSIFIER: Dict[str, Type[Element]] = {
    "title": Title,
    "link": Link,
    "description": Description,
    "language": Language,
    "copyright": Copyright,
    "managingeditor": ManagingEditor,
    "webmaster": WebMaster,
    "pubdate": PubDate,
    "lastbuilddate": LastBuildDate,
    "category": Category,
    "generator": Generator,
    "docs": Docs,
    "cloud": Cloud,
    "ttl": Ttl,
    "rating": Rating,
    "textinput": TextInput,
    "image": Image,
    "skiphours": SkipHours,
    "skipdays": SkipDays,
    "item": Item,
}

ChannelElem = Union[
    Title, Link, Description, Language, Copyright, ManagingEditor, WebMaster,
    PubDate, LastBuildDate, Category, Generator, Docs, Cloud, Ttl, Rating,
    TextInput, Image, SkipHours, SkipDays, Item, Unknown,
]
ItemElem = Union[
    Title, Link, Description, Author, Category, Comments, Enclosure, Guid,
    PubDate, Source, Unknown,
]
ImageElem = Union[Url, Title, Link, Width, Height, Description, Unknown]
SkipHoursElem = Union[Hour, Unknown]
SkipDaysElem = Union[Day, Unknown]


def classify(local_name: str) -> Type[Element]:
    """Classify a tag found directly inside ``<channel>``."""
    return CHANNEL_CLASSIFIER.get(local_name.lower(), Unknown)


class RssIter(DocumentIterator):
    """Pull iterator over the elements of an RSS channel.

    Example:
        >>> for element in RssIter(text):
        ...     if isinstance(element, Item):
        ...         titles = [e.content for e in element if isinstance(e, Title)]
    """

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = CHANNEL_CLASSIFIER
    ROW_CLASS: ClassVar[Type[ContainerElement]] = Item
    component: ClassVar[str] = "rss"

    def __init__(self, data: object, config: Optional[FeedParserConfig] = None) -> None:
        super().__init__(data, config)
        self._channel: Optional[Token] = None

    @property
    def version(self) -> Optional[str]:
        """``version`` attribute of the ``<rss>`` root."""
        root = self.root
        if root is None or not root.name.matches(ROOT_NAME):
            return None
        return root.attributes.get("version")

    @property
    def channel(self) -> Optional[Token]:
        """The ``<channel>`` start tag being enumerated, if one was found."""
        self._ensure_started()
        return self._channel

    def _locate_scope(self, root: Token) -> bool:
        if not root.name.matches(ROOT_NAME):
            if root.name.matches(CHANNEL_NAME):
                self._channel = root
            return True

        channel = self._seek_child({CHANNEL_NAME})
        if channel is None:
            # An <rss> without a channel has nothing to enumerate
            self._context.cursor.advance_to(self._boundary.close_end)
            return False
        self._channel = channel
        self._enter(channel)
        return True
