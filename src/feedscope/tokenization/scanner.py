"""Lazy lexical scanner for feed markup.

The scanner turns a decoded text buffer into markup-level tokens (whole tags,
text runs, comments, CDATA sections, processing instructions and
declarations). Tokens are produced one at a time from a caller-owned offset,
so a consumer can scan ahead from any token boundary without disturbing its
own position. Malformed fragments are reported as ``MALFORMED`` tokens and
never raise.
"""

import html
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import cached_property
from typing import Dict, Iterator, List, Optional, Union

from feedscope.character import decode_input

_START_TAG_NAME = re.compile(r"<([A-Za-z_:\u0080-\uffff][^\s/<>=\"']*)")
_TAG_BODY = re.compile(r"(?:[^>\"'<]|\"[^\"]*\"|'[^']*')*>")
_TAG_BODY_LENIENT = re.compile(r"[^<>]*>")
_END_TAG = re.compile(r"</\s*([^\s<>/]+)[^<>]*>")
_DECLARATION = re.compile(
    r"<!(?:[^>\[\]\"']|\"[^\"]*\"|'[^']*'"
    r"|\[(?:[^\]\"']|\"[^\"]*\"|'[^']*')*\])*>"
)
_ATTRIBUTE = re.compile(
    r"([^\s=/>\"']+)(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s\"'=<>`]+)))?"
)


class TokenType(Enum):
    """Markup token types produced by the scanner."""

    START_TAG = auto()               # <name attr="v">
    END_TAG = auto()                 # </name>
    EMPTY_ELEMENT_TAG = auto()       # <name attr="v"/>
    TEXT = auto()                    # Character data between markup
    CDATA = auto()                   # <![CDATA[ ... ]]>
    COMMENT = auto()                 # <!-- ... -->
    PROCESSING_INSTRUCTION = auto()  # <?target ... ?>
    DECLARATION = auto()             # <!DOCTYPE ...>
    MALFORMED = auto()               # Fragment that could not be scanned


TAG_TOKEN_TYPES = frozenset({
    TokenType.START_TAG,
    TokenType.END_TAG,
    TokenType.EMPTY_ELEMENT_TAG,
})


@dataclass
class TokenPosition:
    """Position information for markup tokens."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> Dict[str, int]:
        """Convert to a dictionary suitable for diagnostics."""
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass(frozen=True)
class TagName:
    """Qualified tag or attribute name, split on the first colon."""

    qualified: str

    @property
    def prefix(self) -> Optional[str]:
        """Namespace prefix, or None when the name is unprefixed."""
        index = self.qualified.find(":")
        if index < 0:
            return None
        return self.qualified[:index]

    @property
    def local(self) -> str:
        """Local part of the name with any namespace prefix removed."""
        return self.qualified[self.qualified.find(":") + 1:]

    def matches(self, local_name: str) -> bool:
        """Compare local names, ignoring prefix and ASCII case."""
        return self.local.lower() == local_name.lower()

    def __str__(self) -> str:
        return self.qualified


@dataclass(frozen=True)
class Attribute:
    """Single attribute parsed from a start tag."""

    name: TagName
    value: Optional[str]


class Attributes:
    """Attributes of a start or empty-element tag.

    Parsing is lenient: stray quotes and junk between attributes are skipped,
    attributes without a value report ``None``. Lookups compare qualified
    names case-insensitively and return the first occurrence.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._items: Optional[List[Attribute]] = None

    def _parse(self) -> List[Attribute]:
        if self._items is None:
            items = []
            for match in _ATTRIBUTE.finditer(self._source):
                name, double, single, bare = match.groups()
                value = next((v for v in (double, single, bare) if v is not None), None)
                items.append(Attribute(
                    name=TagName(name),
                    value=html.unescape(value) if value is not None else None,
                ))
            self._items = items
        return self._items

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get an attribute value by qualified name."""
        needle = name.lower()
        for attribute in self._parse():
            if attribute.name.qualified.lower() == needle:
                return attribute.value
        return default

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to a name to value mapping, first occurrence wins."""
        result: Dict[str, Optional[str]] = {}
        for attribute in self._parse():
            result.setdefault(attribute.name.qualified, attribute.value)
        return result

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        needle = name.lower()
        return any(a.name.qualified.lower() == needle for a in self._parse())

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._parse())

    def __len__(self) -> int:
        return len(self._parse())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attributes):
            return NotImplemented
        return self._parse() == other._parse()

    def __repr__(self) -> str:
        return f"Attributes({self.to_dict()!r})"


EMPTY_ATTRIBUTES = Attributes("")


@dataclass(frozen=True)
class Token:
    """Single markup token referencing a span of the input.

    ``inner_start``/``inner_end`` delimit the attribute region for tags and the
    payload for text, CDATA, comments, processing instructions and
    declarations.
    """

    type: TokenType
    start: int
    end: int
    input: str = field(repr=False, compare=False)
    name: Optional[TagName] = None
    inner_start: int = 0
    inner_end: int = 0

    def __post_init__(self) -> None:
        """Validate token span."""
        if self.start < 0 or self.end < self.start:
            raise ValueError("Token span must satisfy 0 <= start <= end")
        if self.type in TAG_TOKEN_TYPES and self.name is None:
            raise ValueError("Tag tokens require a name")

    @property
    def source(self) -> str:
        """Exact source text of the token."""
        return self.input[self.start:self.end]

    @property
    def payload(self) -> str:
        """Payload text (attribute region for tags), undecoded."""
        return self.input[self.inner_start:self.inner_end]

    @cached_property
    def attributes(self) -> Attributes:
        """Attributes of a start or empty-element tag; empty otherwise."""
        if self.type in (TokenType.START_TAG, TokenType.EMPTY_ELEMENT_TAG):
            return Attributes(self.payload)
        return EMPTY_ATTRIBUTES


class Reader:
    """Lazy token source over one decoded text buffer.

    ``tokenize`` is pure: it reads the token starting at the given offset and
    leaves position tracking to the caller. Scanning from any token boundary
    reproduces the same token sequence as scanning from the beginning.
    """

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError("Reader expects decoded text; use Reader.from_bytes for bytes")
        self._text = text

    @classmethod
    def from_bytes(cls, data: bytes, encoding: Optional[str] = None) -> "Reader":
        """Create a reader from raw bytes.

        Raises:
            FeedEncodingError: If the bytes cannot be decoded
        """
        return cls(decode_input(data, encoding))

    @classmethod
    def from_input(cls, data: Union[str, bytes, "Reader"]) -> "Reader":
        """Create a reader from text, bytes or an existing reader."""
        if isinstance(data, Reader):
            return data
        if isinstance(data, (bytes, bytearray)):
            return cls.from_bytes(bytes(data))
        return cls(data)

    @property
    def text(self) -> str:
        """The full input text."""
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def tokenize(self, pos: int) -> Optional[Token]:
        """Scan the token starting at ``pos``.

        Args:
            pos: Offset of a token boundary

        Returns:
            The token, or None at end of input
        """
        text = self._text
        length = len(text)
        if pos >= length:
            return None

        if text[pos] != "<":
            end = text.find("<", pos)
            if end < 0:
                end = length
            return Token(TokenType.TEXT, pos, end, text, inner_start=pos, inner_end=end)

        if text.startswith("<!--", pos):
            return self._delimited(TokenType.COMMENT, pos, 4, "-->")
        if text.startswith("<![CDATA[", pos):
            return self._delimited(TokenType.CDATA, pos, 9, "]]>")
        if text.startswith("<?", pos):
            return self._delimited(TokenType.PROCESSING_INSTRUCTION, pos, 2, "?>")
        if text.startswith("<!", pos):
            match = _DECLARATION.match(text, pos)
            if match is None:
                return self._malformed(pos)
            return Token(
                TokenType.DECLARATION, pos, match.end(), text,
                inner_start=pos + 2, inner_end=match.end() - 1,
            )
        if text.startswith("</", pos):
            match = _END_TAG.match(text, pos)
            if match is None:
                return self._malformed(pos)
            return Token(
                TokenType.END_TAG, pos, match.end(), text,
                name=TagName(match.group(1)),
                inner_start=match.end(1), inner_end=match.end() - 1,
            )

        return self._start_tag(pos)

    def _start_tag(self, pos: int) -> Token:
        text = self._text
        name_match = _START_TAG_NAME.match(text, pos)
        if name_match is None:
            return self._malformed(pos)

        name_end = name_match.end()
        body = _TAG_BODY.match(text, name_end) or _TAG_BODY_LENIENT.match(text, name_end)
        if body is None:
            return self._malformed(pos)

        close = body.end() - 1
        if close > name_end and text[close - 1] == "/":
            token_type = TokenType.EMPTY_ELEMENT_TAG
            attr_end = close - 1
        else:
            token_type = TokenType.START_TAG
            attr_end = close

        return Token(
            token_type, pos, body.end(), text,
            name=TagName(name_match.group(1)),
            inner_start=name_end, inner_end=attr_end,
        )

    def _delimited(
        self, token_type: TokenType, pos: int, open_length: int, terminator: str
    ) -> Token:
        close = self._text.find(terminator, pos + open_length)
        if close < 0:
            return self._malformed(pos)
        return Token(
            token_type, pos, close + len(terminator), self._text,
            inner_start=pos + open_length, inner_end=close,
        )

    def _malformed(self, pos: int) -> Token:
        # A malformed fragment runs up to the next '<' so scanning can resync
        end = self._text.find("<", pos + 1)
        if end < 0:
            end = len(self._text)
        return Token(TokenType.MALFORMED, pos, end, self._text, inner_start=pos, inner_end=end)

    def iter_tokens(self, pos: int = 0) -> Iterator[Token]:
        """Lazily yield tokens from ``pos`` to the end of input."""
        while True:
            token = self.tokenize(pos)
            if token is None:
                return
            yield token
            pos = token.end

    def __iter__(self) -> Iterator[Token]:
        return self.iter_tokens(0)

    def position(self, offset: int) -> TokenPosition:
        """Compute line and column for an offset."""
        offset = max(0, min(offset, len(self._text)))
        line = self._text.count("\n", 0, offset) + 1
        line_start = self._text.rfind("\n", 0, offset) + 1
        return TokenPosition(line=line, column=offset - line_start + 1, offset=offset)
