"""Utilities: constants and error handling."""

from .constants import MATH_CONSTANTS
from .errors import parse_error

__all__ = ["MATH_CONSTANTS", "parse_error"]
