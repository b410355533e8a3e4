"""Configuration classes for feed pull parsing.

The configuration only selects how extracted content is held and which
ambient services (diagnostics, correlation) are active. It never changes
how tags are matched or classified.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ContentMode(Enum):
    """How element content is backed."""

    OWNED = "owned"         # Copy text into a str when the element is produced
    BORROWED = "borrowed"   # Keep spans into the input, build text on first access


@dataclass
class FeedParserConfig:
    """Configuration shared by a format iterator and all of its sub-scopes."""

    content_mode: ContentMode = ContentMode.OWNED
    decode_entities: bool = True
    collect_diagnostics: bool = True
    max_diagnostics: int = 1000
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if isinstance(self.content_mode, str):
            try:
                self.content_mode = ContentMode(self.content_mode.lower())
            except ValueError:
                raise ValueError(
                    f"content_mode must be one of "
                    f"{[mode.value for mode in ContentMode]}"
                ) from None
        if not isinstance(self.content_mode, ContentMode):
            raise ValueError("content_mode must be a ContentMode")
        if self.max_diagnostics < 0:
            raise ValueError("max_diagnostics must be >= 0")

    @classmethod
    def default(cls) -> "FeedParserConfig":
        """Create the default configuration (owned content, diagnostics on)."""
        return cls()

    @classmethod
    def zero_copy(cls) -> "FeedParserConfig":
        """Create configuration that borrows content from the input text."""
        return cls(content_mode=ContentMode.BORROWED)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        return {
            "content_mode": self.content_mode.value,
            "decode_entities": self.decode_entities,
            "collect_diagnostics": self.collect_diagnostics,
            "max_diagnostics": self.max_diagnostics,
            "correlation_id": self.correlation_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedParserConfig":
        """Create configuration from a dictionary, ignoring unknown keys."""
        known = {
            key: value for key, value in data.items()
            if key in cls.__dataclass_fields__
        }
        return cls(**known)
