"""Atom schema: feed, entry, source and person levels.

``AtomIter`` enters the document root (normally ``<feed>``) and enumerates
its children. Entries, sources, authors and contributors are containers.
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

ROOT_NAME = "feed"


class TextConstruct(LeafElement):
    """Leaf holding an Atom text construct (``text``, ``html`` or ``xhtml``)."""

    type = attribute_property("type")


# Person leaves

class Name(LeafElement):
    """Human-readable name of a person."""


class Uri(LeafElement):
    """IRI associated with a person."""


class Email(LeafElement):
    """E-mail address of a person."""


# Feed, source and entry leaves

class Category(LeafElement):
    """``<category>``; described by its attributes, usually self-closing."""

    term = attribute_property("term")
    scheme = attribute_property("scheme")
    label = attribute_property("label")


class Generator(TextConstruct):
    uri = attribute_property("uri")
    version = attribute_property("version")


class Icon(LeafElement):
    """IRI of a small square image for the feed."""


class Id(LeafElement):
    """Permanent, universally unique identifier."""


class Link(LeafElement):
    """``<link>``; the target is the ``href`` attribute, not the content."""

    href = attribute_property("href")
    rel = attribute_property("rel")
    type = attribute_property("type")
    hreflang = attribute_property("hreflang")
    title = attribute_property("title")
    length = attribute_property("length")


class Logo(LeafElement):
    """IRI of a larger image for the feed."""


class Rights(TextConstruct):
    """Rights held in and over the feed or entry."""


class Subtitle(TextConstruct):
    """Description or subtitle of the feed."""


class Title(TextConstruct):
    """Title of the feed or entry."""


class Updated(LeafElement):
    """Most recent significant modification time."""


class Published(LeafElement):
    """Time of the initial creation or publication."""


class Summary(TextConstruct):
    """Short summary or excerpt of an entry."""


class EntryContent(TextConstruct):
    """``<content>`` of an entry, inline or referenced through ``src``."""

    src = attribute_property("src")


# Containers

class Person(ContainerElement):
    """Atom person construct (``<author>`` or ``<contributor>``)."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {
        "name": Name,
        "uri": Uri,
        "email": Email,
    }


class Author(Person):
    """Author of the feed or entry."""


class Contributor(Person):
    """Person who contributed to the feed or entry."""


_COMMON_CLASSIFIER: Dict[str, Type[Element]] = {
    "author": Author,
    "category": Category,
    "contributor": Contributor,
    "generator": Generator,
    "icon": Icon,
    "id": Id,
    "link": Link,
    "logo": Logo,
    "rights": Rights,
    "subtitle": Subtitle,
    "title": Title,
    "updated": Updated,
}


class Source(ContainerElement):
    """``<source>`` of an entry: metadata of the feed the entry was copied from."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = dict(_COMMON_CLASSIFIER)


class Entry(ContainerElement):
    """``<entry>``: one item of the feed."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {
        "author": Author,
        "category": Category,
        "content": EntryContent,
        "contributor": Contributor,
        "id": Id,
        "link": Link,
        "published": Published,
        "rights": Rights,
        "source": Source,
        "summary": Summary,
        "title": Title,
        "updated": Updated,
    }


FEED_CLASSIFIER: Dict[str, Type[Element]] = dict(_COMMON_CLASSIFIER, entry=Entry)

PersonElem = Union[Name, Uri, Email, Unknown]
SourceElem = Union[
    Author, Category, Contributor, Generator, Icon, Id, Link, Logo, Rights,
    Subtitle, Title, Updated, Unknown,
]
EntryElem = Union[
    Author, Category, EntryContent, Contributor, Id, Link, Published, Rights,
    Source, Summary, Title, Updated, Unknown,
]
FeedElem = Union[
    Author, Category, Contributor, Generator, Icon, Id, Link, Logo, Rights,
    Subtitle, Title, Updated, Entry, Unknown,
]


def classify(local_name: str) -> Type[Element]:
    """Classify a tag found directly inside ``<feed>``."""
    return FEED_CLASSIFIER.get(local_name.lower(), Unknown)


class AtomIter(DocumentIterator):
    """Pull iterator over the elements of an Atom feed."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = FEED_CLASSIFIER
    ROW_CLASS: ClassVar[Type[ContainerElement]] = Entry
    component: ClassVar[str] = "atom"

    @property
    def lang(self) -> Optional[str]:
        """``xml:lang`` attribute of the root."""
        return self.root_attributes.get("xml:lang")

    @property
    def base(self) -> Optional[str]:
        """``xml:base`` attribute of the root."""
        return self.root_attributes.get("xml:base")
