"""Scope-bounded pull iteration shared by every feed format.

Key Components:
    ScopeIterator: Pull iterator confined to one element scope
    DocumentIterator: Top-level iterator that locates the root scope
    ContainerElement: Element that is also the iterator over its own scope
    LeafElement / Unknown: Elements carrying extracted text content
    Cursor / ScopeBoundary: Shared read position and recorded end-tag location
    find_matching_end / read_content: Tag matching and content extraction
"""

from .content import Content
from .cursor import Cursor, ScopeBoundary
from .elements import Element, LeafElement, Unknown, attribute_property
from .iterators import (
    ContainerElement,
    DocumentIterator,
    IterationState,
    ParseContext,
    ScopeIterator,
)
from .matching import find_matching_end, read_content

__all__ = [
    "ContainerElement",
    "Content",
    "Cursor",
    "DocumentIterator",
    "Element",
    "IterationState",
    "LeafElement",
    "ParseContext",
    "ScopeBoundary",
    "ScopeIterator",
    "Unknown",
    "attribute_property",
    "find_matching_end",
    "read_content",
]
