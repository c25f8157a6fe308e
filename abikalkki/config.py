"""
Runtime settings for Abikalkki.

Defaults live on the dataclass; ``main.py`` overrides them from the
command line.
"""

from dataclasses import dataclass, field
from typing import Tuple

ANGLE_MODES = ("deg", "rad")


@dataclass
class Settings:
    """Session-wide configuration."""

    angle_mode: str = "deg"
    precision: int = 32  # significant digits of committed results
    preview_places: int = 8
    decimal_separator: str = ","
    commit_keys: Tuple[str, ...] = field(default=("Return", "Enter"))

    def __post_init__(self):
        if self.angle_mode not in ANGLE_MODES:
            raise ValueError(
                f"Unknown angle mode: {self.angle_mode}. Available: {list(ANGLE_MODES)}"
            )
        if self.precision < self.preview_places + 1:
            raise ValueError("precision must exceed the preview decimal places")


DEFAULT_SETTINGS = Settings()
