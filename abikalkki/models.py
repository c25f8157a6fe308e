"""
Core data structures for Abikalkki.

These dataclasses define the contract between the engine, the session
store and the front ends.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, auto
from typing import Optional, Tuple


class MathErrorKind(Enum):
    """Closed set of evaluation failure categories."""

    SYNTAX = auto()
    UNDEFINED_IDENTIFIER = auto()
    ARITY = auto()
    DOMAIN = auto()


@dataclass(frozen=True)
class MathError:
    """
    A typed evaluation failure returned by the engine.

    Only ``kind`` drives formatting; the remaining fields fill in the
    message where the kind has something to say.
    """

    kind: MathErrorKind
    detail: str = ""
    identifier: Optional[str] = None
    expected: Optional[str] = None  # e.g. "1" or "1-2"
    got: Optional[int] = None


@dataclass(frozen=True)
class HistoryRecord:
    """One committed expression, as shown in the history list."""

    expression: str  # prettified display form
    answer: Decimal
    is_latex_origin: bool = False


@dataclass(frozen=True)
class SessionState:
    """
    Immutable snapshot of a calculator session.

    History is newest-first.
    """

    answer: Decimal = Decimal(0)
    index: Decimal = Decimal(0)
    history: Tuple[HistoryRecord, ...] = field(default_factory=tuple)
    hint: Optional[str] = None
    pending_latex: bool = False
