"""Output layer: display canonicalization and number formatting."""

from .prettify import prettify
from .formatting import format_answer, format_preview

__all__ = ["prettify", "format_answer", "format_preview"]
