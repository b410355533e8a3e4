"""Structured logging utilities for feed pull parsing.

Every logger carries the component name and an optional correlation ID so
that log lines emitted by nested scope iterators can be traced back to the
document they belong to.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Wraps a stdlib logger and stamps each record with document context."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Bind a logger to one parse.

        Args:
            name: Dotted logger name, usually the calling module
            correlation_id: Identifier of the document being parsed
            component: Short label for the emitting part; defaults to the
                last segment of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rsplit(".", 1)[-1]

    def context(self, **fields: Any) -> Dict[str, Any]:
        """Build the ``extra`` mapping for one record."""
        record_fields = {"component": self.component, "correlation_id": self.correlation_id}
        record_fields.update(fields)
        return record_fields

    def is_debug_enabled(self) -> bool:
        """Check whether DEBUG records would be emitted.

        Scope iterators call this before assembling per-token extras.
        """
        return self.logger.isEnabledFor(logging.DEBUG)

    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, message, extra=self.context(**(extra or {})))

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, extra)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Create a logger bound to one document and component."""
    return CorrelationLogger(name, correlation_id, component)
