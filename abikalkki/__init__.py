"""Abikalkki - interactive single-line calculator with live preview."""

__version__ = "0.4.0"
