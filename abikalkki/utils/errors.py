"""
Centralized error handling for Abikalkki.

The engine raises the exceptions below internally; ``calculate`` turns
them into ``MathError`` values so nothing crosses the engine boundary as
an exception. ``parse_error`` renders a ``MathError`` for the preview hint.
"""

from typing import Callable, Dict, List, Optional

from ..models import MathError, MathErrorKind


class CalculatorError(Exception):
    """
    Base exception for all evaluation errors.

    Subclasses set the error kind and default suggestions.
    """

    kind = MathErrorKind.SYNTAX
    default_suggestions: List[str] = []

    def __init__(
        self,
        message: str,
        *,
        identifier: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.user_message = message
        self.identifier = identifier
        self.suggestions = suggestions or self.default_suggestions.copy()

    def to_math_error(self) -> MathError:
        """Convert to the value returned across the engine boundary."""
        return MathError(
            kind=self.kind, detail=self.user_message, identifier=self.identifier
        )


class ExpressionSyntaxError(CalculatorError):
    """Raised when the expression cannot be parsed."""

    kind = MathErrorKind.SYNTAX
    default_suggestions = [
        "Check for missing operands or unbalanced parentheses",
        "Separate function arguments with ';'",
    ]


class UndefinedIdentifierError(CalculatorError):
    """Raised when the expression uses an unknown name."""

    kind = MathErrorKind.UNDEFINED_IDENTIFIER
    default_suggestions = [
        "Check the spelling of function and variable names",
        "Use 'ans' for the previous answer and 'ind' for the index",
    ]

    def __init__(self, name: str):
        super().__init__(f"Unknown name '{name}'", identifier=name)


class ArityError(CalculatorError):
    """Raised when a function is called with the wrong number of arguments."""

    kind = MathErrorKind.ARITY

    def __init__(self, name: str, expected: str, got: int):
        super().__init__(
            f"{name} expects {expected} argument(s), got {got}",
            identifier=name,
            suggestions=[f"See the usage of {name}"],
        )
        self.expected = expected
        self.got = got

    def to_math_error(self) -> MathError:
        return MathError(
            kind=self.kind,
            detail=self.user_message,
            identifier=self.identifier,
            expected=self.expected,
            got=self.got,
        )


class MathDomainError(CalculatorError):
    """Raised when a value falls outside a function's domain."""

    kind = MathErrorKind.DOMAIN
    default_suggestions = ["Check for division by zero or out-of-range input"]


# === Formatting ===


def _syntax_message(error: MathError) -> str:
    return "Incomplete or invalid expression"


def _undefined_message(error: MathError) -> str:
    if error.identifier:
        return f"Unknown name: {error.identifier}"
    return "Unknown name"


def _arity_message(error: MathError) -> str:
    if error.identifier and error.expected is not None:
        return (
            f"{error.identifier} takes {error.expected} argument(s), "
            f"got {error.got}"
        )
    return "Wrong number of arguments"


def _domain_message(error: MathError) -> str:
    return error.detail or "Result is undefined"


_FORMATTERS: Dict[MathErrorKind, Callable[[MathError], str]] = {
    MathErrorKind.SYNTAX: _syntax_message,
    MathErrorKind.UNDEFINED_IDENTIFIER: _undefined_message,
    MathErrorKind.ARITY: _arity_message,
    MathErrorKind.DOMAIN: _domain_message,
}


def parse_error(error: MathError) -> str:
    """Human-readable message for a preview-path failure."""
    return _FORMATTERS[error.kind](error)


_ERROR_CLASSES = {
    MathErrorKind.SYNTAX: ExpressionSyntaxError,
    MathErrorKind.UNDEFINED_IDENTIFIER: UndefinedIdentifierError,
    MathErrorKind.ARITY: ArityError,
    MathErrorKind.DOMAIN: MathDomainError,
}


def suggestions_for(error: MathError) -> List[str]:
    """Actionable suggestions for an error value."""
    if error.kind is MathErrorKind.ARITY and error.identifier:
        return [f"See the usage of {error.identifier}"]
    return _ERROR_CLASSES[error.kind].default_suggestions.copy()


def format_error_for_user(error: MathError) -> str:
    """
    Format an error into a single line.

    Used by the command line, which shows the first suggestion as well.
    """
    result = parse_error(error)
    suggestions = suggestions_for(error)
    if suggestions:
        result += f". Try: {suggestions[0]}"
    return result
