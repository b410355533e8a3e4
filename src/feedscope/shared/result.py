"""Diagnostic types recorded while pulling elements out of a feed.

Recovered problems (malformed tokens, unterminated containers, stray end
tags) never interrupt iteration. They are reported as diagnostic entries on
the parse context shared by a format iterator and all of its sub-scopes.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Recovered malformation
    ERROR = auto()      # Content lost during recovery


class DiagnosticCode(Enum):
    """Kinds of recovered problems."""

    MALFORMED_TOKEN = "malformed_token"
    UNTERMINATED_ELEMENT = "unterminated_element"
    STRAY_END_TAG = "stray_end_tag"
    STRAY_TEXT = "stray_text"
    MISSING_ROOT = "missing_root"


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    code: DiagnosticCode
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "code": self.code.value,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
        }


@dataclass
class DiagnosticLog:
    """Bounded collection of diagnostics for one document."""

    max_entries: int = 1000
    entries: List[DiagnosticEntry] = field(default_factory=list)
    dropped: int = 0

    def add(self, entry: DiagnosticEntry) -> None:
        """Record an entry, counting it as dropped once the log is full."""
        if len(self.entries) >= self.max_entries:
            self.dropped += 1
            return
        self.entries.append(entry)

    def by_severity(self, severity: DiagnosticSeverity) -> List[DiagnosticEntry]:
        """Get entries of the given severity."""
        return [entry for entry in self.entries if entry.severity == severity]

    def by_code(self, code: DiagnosticCode) -> List[DiagnosticEntry]:
        """Get entries of the given kind."""
        return [entry for entry in self.entries if entry.code == code]

    @property
    def has_warnings(self) -> bool:
        """Check if any recovered malformation was recorded."""
        return any(
            entry.severity in (DiagnosticSeverity.WARNING, DiagnosticSeverity.ERROR)
            for entry in self.entries
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DiagnosticEntry]:
        return iter(self.entries)
