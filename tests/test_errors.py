"""
Tests for error handling module.

Tests the exception hierarchy, its conversion to error values and the
messages shown to the user.
"""

import pytest


class TestErrorConversion:
    """Test exception to MathError conversion."""

    def test_syntax_error(self):
        """Test ExpressionSyntaxError becomes a SYNTAX value."""
        from abikalkki.utils.errors import ExpressionSyntaxError
        from abikalkki.models import MathErrorKind

        error = ExpressionSyntaxError("Empty expression").to_math_error()

        assert error.kind == MathErrorKind.SYNTAX
        assert error.detail == "Empty expression"
        assert error.identifier is None

    def test_undefined_identifier(self):
        """Test UndefinedIdentifierError carries the name."""
        from abikalkki.utils.errors import UndefinedIdentifierError
        from abikalkki.models import MathErrorKind

        exc = UndefinedIdentifierError("foo")
        error = exc.to_math_error()

        assert "foo" in str(exc)
        assert error.kind == MathErrorKind.UNDEFINED_IDENTIFIER
        assert error.identifier == "foo"

    def test_arity_error(self):
        """Test ArityError carries expected and actual counts."""
        from abikalkki.utils.errors import ArityError
        from abikalkki.models import MathErrorKind

        error = ArityError("log", "1-2", 3).to_math_error()

        assert error.kind == MathErrorKind.ARITY
        assert error.identifier == "log"
        assert error.expected == "1-2"
        assert error.got == 3

    def test_domain_error(self):
        """Test MathDomainError keeps its detail."""
        from abikalkki.utils.errors import MathDomainError
        from abikalkki.models import MathErrorKind

        error = MathDomainError("Division by zero").to_math_error()

        assert error.kind == MathErrorKind.DOMAIN
        assert error.detail == "Division by zero"

    def test_hierarchy(self):
        """Test every error derives from CalculatorError."""
        from abikalkki.utils.errors import (
            CalculatorError,
            ExpressionSyntaxError,
            UndefinedIdentifierError,
            ArityError,
            MathDomainError,
        )

        for cls in (
            ExpressionSyntaxError,
            UndefinedIdentifierError,
            ArityError,
            MathDomainError,
        ):
            assert issubclass(cls, CalculatorError)

    def test_suggestions_are_copied(self):
        """Test instances do not share the class suggestion list."""
        from abikalkki.utils.errors import ExpressionSyntaxError

        exc = ExpressionSyntaxError("bad")
        exc.suggestions.append("extra")

        assert "extra" not in ExpressionSyntaxError.default_suggestions


class TestParseError:
    """Test messages for the preview hint."""

    def test_every_kind_has_message(self):
        """Test parse_error covers the whole enum."""
        from abikalkki.utils.errors import parse_error
        from abikalkki.models import MathError, MathErrorKind

        for kind in MathErrorKind:
            assert parse_error(MathError(kind=kind))

    def test_every_kind_has_formatter(self):
        """Test the formatter table has exactly one entry per kind."""
        from abikalkki.utils.errors import _FORMATTERS
        from abikalkki.models import MathErrorKind

        assert set(_FORMATTERS) == set(MathErrorKind)

    def test_syntax_message(self):
        """Test syntax errors use a fixed message."""
        from abikalkki.utils.errors import parse_error
        from abikalkki.models import MathError, MathErrorKind

        error = MathError(kind=MathErrorKind.SYNTAX, detail="EOF in multi-line")

        assert parse_error(error) == "Incomplete or invalid expression"

    def test_undefined_message_names_identifier(self):
        """Test unknown names are shown."""
        from abikalkki.utils.errors import parse_error
        from abikalkki.models import MathError, MathErrorKind

        error = MathError(kind=MathErrorKind.UNDEFINED_IDENTIFIER, identifier="x")

        assert parse_error(error) == "Unknown name: x"

    def test_arity_message(self):
        """Test arity messages show both counts."""
        from abikalkki.utils.errors import parse_error
        from abikalkki.models import MathError, MathErrorKind

        error = MathError(
            kind=MathErrorKind.ARITY, identifier="sqrt", expected="1", got=2
        )

        assert parse_error(error) == "sqrt takes 1 argument(s), got 2"

    def test_domain_message(self):
        """Test domain messages pass the detail through."""
        from abikalkki.utils.errors import parse_error
        from abikalkki.models import MathError, MathErrorKind

        assert (
            parse_error(MathError(kind=MathErrorKind.DOMAIN, detail="Division by zero"))
            == "Division by zero"
        )
        assert parse_error(MathError(kind=MathErrorKind.DOMAIN)) == "Result is undefined"

    def test_engine_errors_render(self):
        """Test real engine failures produce readable hints."""
        from decimal import Decimal
        from abikalkki.engine import calculate
        from abikalkki.utils.errors import parse_error

        result = calculate("foo(1)", Decimal(0), Decimal(0))

        assert parse_error(result.error) == "Unknown name: foo"


class TestFormatErrorForUser:
    """Test single-line messages for the command line."""

    def test_includes_suggestion(self):
        """Test the first suggestion is appended."""
        from abikalkki.utils.errors import format_error_for_user
        from abikalkki.models import MathError, MathErrorKind

        text = format_error_for_user(MathError(kind=MathErrorKind.SYNTAX))

        assert text.startswith("Incomplete or invalid expression. Try: ")
        assert "parentheses" in text

    def test_arity_suggestion_names_function(self):
        """Test arity suggestions point at the function."""
        from abikalkki.utils.errors import format_error_for_user
        from abikalkki.models import MathError, MathErrorKind

        text = format_error_for_user(
            MathError(kind=MathErrorKind.ARITY, identifier="nCr", expected="2", got=1)
        )

        assert "See the usage of nCr" in text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
