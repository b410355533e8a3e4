"""Shared read position and scope boundaries.

A format iterator and every sub-scope iterator it hands out reference the
same ``Cursor``. Each iterator owns only its ``ScopeBoundary``; whichever
iterator is being advanced moves the cursor, and the cursor only ever moves
forward.
"""

from dataclasses import dataclass


class Cursor:
    """Single forward-only position cell into the input."""

    __slots__ = ("_pos",)

    def __init__(self, pos: int = 0) -> None:
        if pos < 0:
            raise ValueError("Cursor position must be >= 0")
        self._pos = pos

    @property
    def pos(self) -> int:
        """Current offset into the input."""
        return self._pos

    def advance_to(self, pos: int) -> bool:
        """Move forward to ``pos``; positions behind the cursor are ignored.

        Returns:
            True if the cursor moved
        """
        if pos > self._pos:
            self._pos = pos
            return True
        return False

    def __repr__(self) -> str:
        return f"Cursor(pos={self._pos})"


@dataclass(frozen=True)
class ScopeBoundary:
    """Location of the end tag that closes one element instance.

    Attributes:
        close_start: Offset of the matching end tag
        close_end: Offset just past the matching end tag
        terminated: False when the input (or the enclosing scope) ended first
    """

    close_start: int
    close_end: int
    terminated: bool = True

    def __post_init__(self) -> None:
        """Validate boundary offsets."""
        if self.close_start < 0 or self.close_end < self.close_start:
            raise ValueError("Boundary must satisfy 0 <= close_start <= close_end")

    @classmethod
    def empty(cls, pos: int) -> "ScopeBoundary":
        """Boundary of a self-closing element: the scope has no content."""
        return cls(pos, pos)

    @classmethod
    def open_ended(cls, length: int) -> "ScopeBoundary":
        """Boundary covering everything up to the end of input."""
        return cls(length, length, terminated=False)
