"""OPML schema: head metadata and nested outlines.

``<head>`` and ``<body>`` are transparent groupings: ``OpmlIter`` yields the
head leaves followed by the top-level outlines as one sequence. Every outline
is a container over its nested outlines; a self-closing outline is simply an
empty container.
"""

from typing import ClassVar, Dict, FrozenSet, Optional, Type, Union

from feedscope.scope import (
    ContainerElement,
    DocumentIterator,
    Element,
    LeafElement,
    Unknown,
    attribute_property,
)

ROOT_NAME = "opml"


class Title(LeafElement):
    """Title of the document."""


class DateCreated(LeafElement):
    """Date the document was created."""


class DateModified(LeafElement):
    """Date the document was last modified."""


class OwnerName(LeafElement):
    """Name of the document owner."""


class OwnerEmail(LeafElement):
    """E-mail address of the document owner."""


class OwnerId(LeafElement):
    """URL of a page for contacting the owner."""


class Docs(LeafElement):
    """URL of the format documentation."""


class ExpansionState(LeafElement):
    """Comma-separated line numbers of expanded outlines."""


class VertScrollState(LeafElement):
    """Line of the outline shown at the top of the window."""


class WindowTop(LeafElement):
    """Top edge of the display window, in pixels."""


class WindowLeft(LeafElement):
    """Left edge of the display window, in pixels."""


class WindowBottom(LeafElement):
    """Bottom edge of the display window, in pixels."""


class WindowRight(LeafElement):
    """Right edge of the display window, in pixels."""


class Outline(ContainerElement):
    """``<outline>``: a node of the outline tree, described by its attributes.

    Subscription lists set ``type="rss"`` with ``xmlUrl`` pointing at the feed.
    """

    text = attribute_property("text")
    type = attribute_property("type")
    title = attribute_property("title")
    xml_url = attribute_property("xmlUrl")
    html_url = attribute_property("htmlUrl")
    description = attribute_property("description")
    version = attribute_property("version")
    language = attribute_property("language")

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {}

    @property
    def is_subscription(self) -> bool:
        """Check if the outline points at a feed."""
        return bool(self.xml_url)


# Outlines nest outlines
Outline.CLASSIFIER["outline"] = Outline

HEAD_NAMES: FrozenSet[str] = frozenset({"head", "body"})

OPML_CLASSIFIER: Dict[str, Type[Element]] = {
    "title": Title,
    "datecreated": DateCreated,
    "datemodified": DateModified,
    "ownername": OwnerName,
    "owneremail": OwnerEmail,
    "ownerid": OwnerId,
    "docs": Docs,
    "expansionstate": ExpansionState,
    "vertscrollstate": VertScrollState,
    "windowtop": WindowTop,
    "windowleft": WindowLeft,
    "windowbottom": WindowBottom,
    "windowright": WindowRight,
    "outline": Outline,
}

HeadElem = Union[
    Title, DateCreated, DateModified, OwnerName, OwnerEmail, OwnerId, Docs,
    ExpansionState, VertScrollState, WindowTop, WindowLeft, WindowBottom,
    WindowRight, Unknown,
]
OutlineElem = Union[Outline, Unknown]
OpmlElem = Union[HeadElem, Outline]


def classify(local_name: str) -> Type[Element]:
    """Classify a tag found in ``<head>`` or ``<body>``."""
    return OPML_CLASSIFIER.get(local_name.lower(), Unknown)


class OpmlIter(DocumentIterator):
    """Pull iterator over head metadata and top-level outlines."""

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = OPML_CLASSIFIER
    ROW_CLASS: ClassVar[Type[ContainerElement]] = Outline
    TRANSPARENT: ClassVar[FrozenSet[str]] = HEAD_NAMES
    component: ClassVar[str] = "opml"

    @property
    def version(self) -> Optional[str]:
        """``version`` attribute of the ``<opml>`` root."""
        root = self.root
        if root is None or not root.name.matches(ROOT_NAME):
            return None
        return root.attributes.get("version")
