"""Base classes for classified feed elements.

Each schema module defines one class per recognized tag. Leaf elements carry
their extracted content; container elements are sub-scope iterators (see
``feedscope.scope.iterators``). Tags that a schema does not recognize at a
given level surface as ``Unknown`` with their exact source name.
"""

from typing import ClassVar, Optional

from feedscope.tokenization import Attributes, TagName, Token, TokenType

from .content import Content


def attribute_property(name: str, doc: Optional[str] = None) -> property:
    """Build a read-only property returning one start-tag attribute."""

    def getter(self: "Element") -> Optional[str]:
        return self.get_attribute(name)

    getter.__name__ = name
    return property(getter, doc=doc or f"Value of the ``{name}`` attribute, if present.")


class Element:
    """Common accessors for every classified element."""

    kind: ClassVar[str] = "element"

    def __init__(self, tag: Token) -> None:
        self._tag = tag

    @property
    def tag(self) -> Token:
        """The start (or empty-element) tag token."""
        return self._tag

    @property
    def tag_name(self) -> TagName:
        """Qualified tag name as written in the source."""
        return self._tag.name

    @property
    def name(self) -> str:
        """Qualified tag name as a string."""
        return self._tag.name.qualified

    @property
    def attributes(self) -> Attributes:
        """Attributes of the start tag."""
        return self._tag.attributes

    @property
    def is_empty_tag(self) -> bool:
        """Check if the element was written as a self-closing tag."""
        return self._tag.type is TokenType.EMPTY_ELEMENT_TAG

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a start-tag attribute by qualified name."""
        return self._tag.attributes.get(name, default)


class LeafElement(Element):
    """Element whose value of interest is its own text."""

    kind: ClassVar[str] = "leaf"

    def __init__(self, tag: Token, content: Optional[Content] = None) -> None:
        super().__init__(tag)
        self._content = content

    @property
    def content(self) -> Optional[str]:
        """Text content.

        An empty string means the element was present with no text; None
        means it was self-closing, so content does not apply.
        """
        if self._content is None:
            return None
        return self._content.text

    @property
    def raw(self) -> Optional[str]:
        """Exact source between the start tag and its matching end tag."""
        if self._content is None:
            return None
        return self._content.raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LeafElement):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.name == other.name
            and self.content == other.content
            and self.attributes == other.attributes
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.content!r})"


class Unknown(LeafElement):
    """Tag not recognized at the level where it occurred."""

    kind: ClassVar[str] = "unknown"

    def __repr__(self) -> str:
        return f"Unknown({self.name!r}, {self.content!r})"
