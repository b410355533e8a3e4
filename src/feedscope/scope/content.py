"""Extracted element content.

``Content`` records the text-bearing spans found between a start tag and its
matching end tag. Text is assembled from those spans either eagerly (owned
mode) or on first access (borrowed mode); both produce the same string.
"""

import html
from typing import Optional, Sequence, Tuple

# (start, end, decode_entities)
Segment = Tuple[int, int, bool]


class Content:
    """Text content of one leaf element."""

    __slots__ = ("_input", "_segments", "_raw_start", "_raw_end", "_text")

    def __init__(
        self,
        input_text: str,
        segments: Sequence[Segment],
        raw_start: int,
        raw_end: int
    ) -> None:
        self._input = input_text
        self._segments = tuple(segments)
        self._raw_start = raw_start
        self._raw_end = raw_end
        self._text: Optional[str] = None

    @property
    def text(self) -> str:
        """Concatenated text; empty when the element held no text."""
        if self._text is None:
            self._text = "".join(
                html.unescape(self._input[start:end]) if decode
                else self._input[start:end]
                for start, end, decode in self._segments
            )
        return self._text

    @property
    def raw(self) -> str:
        """Exact source between the start tag and its matching end tag."""
        return self._input[self._raw_start:self._raw_end]

    @property
    def is_materialized(self) -> bool:
        """Check if text has already been assembled."""
        return self._text is not None

    def materialize(self) -> "Content":
        """Assemble text now and return self."""
        self.text
        return self

    def __str__(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Content):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    def __repr__(self) -> str:
        return f"Content({self.text!r})"
