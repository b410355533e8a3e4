"""Command-line interface for feedscope.

Provides document type detection, element dumps and HTML feed-link
discovery from the shell.
"""

from .main import main

__all__ = ["main"]
