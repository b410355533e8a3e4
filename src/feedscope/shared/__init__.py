"""Shared utilities for feed pull parsing.

This module provides the configuration object, diagnostic types and logging
helpers used across all processing layers.
"""

from .config import ContentMode, FeedParserConfig
from .logging import CorrelationLogger, get_logger
from .result import (
    DiagnosticCode,
    DiagnosticEntry,
    DiagnosticLog,
    DiagnosticSeverity,
)

__all__ = [
    "ContentMode",
    "CorrelationLogger",
    "DiagnosticCode",
    "DiagnosticEntry",
    "DiagnosticLog",
    "DiagnosticSeverity",
    "FeedParserConfig",
    "get_logger",
]
