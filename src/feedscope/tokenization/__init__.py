"""Token source for feed pull parsing.

Key Components:
    Reader: Lazy scanner producing markup tokens from a caller-owned offset
    Token: One markup token referencing a span of the input
    TokenType: Enumeration of all markup token types
    TagName: Qualified name with prefix/local accessors
    Attributes: Leniently parsed start-tag attributes
    TokenPosition: Line/column tracking for diagnostics
"""

from .scanner import (
    TAG_TOKEN_TYPES,
    Attribute,
    Attributes,
    Reader,
    TagName,
    Token,
    TokenPosition,
    TokenType,
)

__all__ = [
    "TAG_TOKEN_TYPES",
    "Attribute",
    "Attributes",
    "Reader",
    "TagName",
    "Token",
    "TokenPosition",
    "TokenType",
]
