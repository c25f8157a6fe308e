"""
Basic tests for Abikalkki engine functionality.
"""

import pytest
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

ZERO = Decimal(0)


def calc(expression, answer=ZERO, index=ZERO, angle_mode="deg"):
    from abikalkki.engine import calculate

    return calculate(expression, answer, index, angle_mode)


class TestArithmetic:
    """Tests for plain arithmetic."""

    def test_simple_sum(self):
        """Test 2+2 evaluates to exactly 4."""
        result = calc("2+2")

        assert result.is_ok
        assert result.value == 4
        assert result.error is None

    def test_decimal_comma(self):
        """Test that a comma between digits is a decimal separator."""
        result = calc("1,5+1")

        assert result.value == Decimal("2.5")

    def test_exact_decimals(self):
        """Test that decimal input is exact, not binary floating point."""
        result = calc("0,1+0,2")

        assert result.value == Decimal("0.3")

    def test_power_with_caret(self):
        """Test ^ as exponentiation."""
        assert calc("2^10").value == 1024

    def test_implicit_multiplication(self):
        """Test number followed by a parenthesis multiplies."""
        assert calc("2(3+4)").value == 14

    def test_irrational_result(self):
        """Test that irrational results are evaluated to many digits."""
        result = calc("2pi")

        assert result.is_ok
        assert str(result.value).startswith("6.28318530717958647")

    def test_display_glyphs_accepted(self):
        """Test that prettified text evaluates the same as the input."""
        assert calc("2·3").value == 6
        assert calc("√(16)").value == 4
        assert calc("8÷2").value == 4

    def test_root_sign_before_operand(self):
        """Test √ applies to a bare number or name."""
        assert calc("√9").value == 3
        assert calc("√0,25").value == Decimal("0.5")
        assert calc("√ans", answer=Decimal(16)).value == 4
        assert calc("2√9").value == 6
        assert calc("√2pi").is_ok


class TestAccumulators:
    """Tests for ans and ind."""

    def test_answer_variable(self):
        """Test that ans refers to the previous answer."""
        result = calc("ans+1", answer=Decimal(4))

        assert result.value == 5

    def test_index_variable(self):
        """Test that ind refers to the index accumulator."""
        result = calc("ind*2", index=Decimal("1.5"))

        assert result.value == 3

    def test_huge_answer_reused(self):
        """Test an answer with thousands of digits works as ans."""
        huge = calc("10^5000").value

        assert huge == Decimal(10**5000)
        assert calc("ans+1", answer=huge).value == Decimal(10**5000 + 1)
        assert calc("1+1", answer=huge).value == 2
        assert calc("ans^2", answer=huge).value == Decimal(10**10000)


class TestFunctions:
    """Tests for built-in functions."""

    def test_sine_in_degrees(self):
        """Test sin(30) = 0.5 in degree mode."""
        assert calc("sin(30)").value == Decimal("0.5")

    def test_sine_in_radians(self):
        """Test angle mode switches the unit."""
        assert calc("sin(0)", angle_mode="rad").value == 0
        assert calc("cos(pi)", angle_mode="rad").value == -1

    def test_inverse_sine_returns_degrees(self):
        """Test asin(1) = 90 in degree mode."""
        assert calc("asin(1)").value == 90

    def test_multiple_arguments(self):
        """Test that ';' separates arguments."""
        assert calc("max(1;7;3)").value == 7
        assert calc("nCr(5;2)").value == 10
        assert calc("root(27;3)").value == 3

    def test_round(self):
        """Test rounding half away from zero."""
        assert calc("round(2,5)").value == 3
        assert calc("round(1,2345;2)").value == Decimal("1.23")

    def test_factorial_function(self):
        """Test fact(5) = 120."""
        assert calc("fact(5)").value == 120
        assert calc("5!").value == 120

    def test_logarithm_base(self):
        """Test log with an explicit base."""
        assert calc("log(8;2)").value == 3


class TestErrors:
    """Tests for typed evaluation failures."""

    def test_incomplete_expression(self):
        """Test that 2+ is a syntax error."""
        from abikalkki.models import MathErrorKind

        result = calc("2+")

        assert result.is_err
        assert result.error.kind == MathErrorKind.SYNTAX

    def test_empty_expression(self):
        """Test that an empty buffer is a syntax error."""
        from abikalkki.models import MathErrorKind

        assert calc("").error.kind == MathErrorKind.SYNTAX
        assert calc("   ").error.kind == MathErrorKind.SYNTAX

    def test_open_call_is_syntax_error(self):
        """Test that an unclosed call does not evaluate."""
        from abikalkki.models import MathErrorKind

        assert calc("sin(").error.kind == MathErrorKind.SYNTAX

    def test_unknown_name(self):
        """Test undefined identifiers are reported by name."""
        from abikalkki.models import MathErrorKind

        result = calc("2x")

        assert result.error.kind == MathErrorKind.UNDEFINED_IDENTIFIER
        assert result.error.identifier == "x"

    def test_unknown_function(self):
        """Test an unknown function call."""
        from abikalkki.models import MathErrorKind

        result = calc("foo(2)")

        assert result.error.kind == MathErrorKind.UNDEFINED_IDENTIFIER
        assert result.error.identifier == "foo"

    def test_wrong_argument_count(self):
        """Test arity errors carry the expected and actual counts."""
        from abikalkki.models import MathErrorKind

        result = calc("sqrt(1;2)")

        assert result.error.kind == MathErrorKind.ARITY
        assert result.error.identifier == "sqrt"
        assert result.error.expected == "1"
        assert result.error.got == 2

    @pytest.mark.parametrize(
        "expression",
        [
            "1/0",
            "sqrt(-4)",
            "ln(0)",
            "tan(90)",
            "fact(-1)",
            "asin(2)",
            "0,5!",
            "(-3)!",
        ],
    )
    def test_domain_errors(self, expression):
        """Test out-of-domain input is a domain error."""
        from abikalkki.models import MathErrorKind

        assert calc(expression).error.kind == MathErrorKind.DOMAIN

    @pytest.mark.parametrize(
        "expression",
        [
            "9^9^9",
            "2^(10^9)",
            "0,5^1000000",
            "(1+10^(-9))^(10^12)",
            "10^(-200000)",
            "fact(100000)",
            "100000!",
            "nCr(1000000;3)",
            "nPr(50000;2)",
            "round(1;1000000)",
        ],
    )
    def test_result_too_large(self, expression):
        """Test runaway powers and factorials fail instead of hanging."""
        from abikalkki.models import MathErrorKind

        result = calc(expression)

        assert result.error.kind == MathErrorKind.DOMAIN
        assert result.error.detail == "Result is too large"

    def test_large_results_within_limit(self):
        """Test big but bounded results still evaluate exactly."""
        assert calc("2^1000").value == Decimal(2**1000)
        assert calc("(-1)^(10^9)").value == 1
        assert calc("0^(10^9)").value == 0
        assert calc("fact(1000)").is_ok
        assert calc("1000!").value == calc("fact(1000)").value

    def test_attribute_access_rejected(self):
        """Test that Python attribute access is not evaluated."""
        from abikalkki.models import MathErrorKind

        assert calc("(1).real").error.kind == MathErrorKind.SYNTAX

    def test_private_names_rejected(self):
        """Test that dunder names are not evaluated."""
        result = calc("__import__(1)")

        assert result.is_err

    def test_never_raises(self):
        """Test that calculate returns errors instead of raising."""
        for expression in ["((", "))", "2**", "lambda: 1", "[1]", "'a'"]:
            assert calc(expression).is_err


class TestDocumentation:
    """Tests for the documentation index."""

    def test_known_function(self):
        """Test lookup of a documented function."""
        from abikalkki.engine import get_documentation

        doc = get_documentation("sin")

        assert doc is not None
        assert doc.usage == "sin(x)"

    def test_unknown_function(self):
        """Test lookup of an unknown name."""
        from abikalkki.engine import get_documentation

        assert get_documentation("nope") is None

    def test_every_function_documented(self):
        """Test every registered function has usage text naming it."""
        from abikalkki.engine import list_functions

        for doc in list_functions():
            assert doc.usage.startswith(doc.name + "(")


class TestPrettify:
    """Tests for display canonicalization."""

    def test_keeps_simple_expression(self):
        """Test 2+2 displays as typed."""
        from abikalkki.output.prettify import prettify

        assert prettify("2+2") == "2+2"

    def test_rules(self):
        """Test whitespace, operators and names."""
        from abikalkki.output.prettify import prettify

        assert prettify(" 2 + 2 ") == "2+2"
        assert prettify("2**3") == "2^3"
        assert prettify("2*pi") == "2·π"
        assert prettify("sqrt(2)") == "√(2)"
        assert prettify("pipe") == "pipe"

    @pytest.mark.parametrize(
        "expression",
        ["2+2", "2 * pi", "sqrt(2) ** 2", "ans*3", "p i", "* *", "(1)/(2)"],
    )
    def test_idempotent(self, expression):
        """Test prettify(prettify(x)) == prettify(x)."""
        from abikalkki.output.prettify import prettify

        once = prettify(expression)
        assert prettify(once) == once


class TestFormatting:
    """Tests for number formatting."""

    def test_preview_fixed_places(self):
        """Test the preview always shows 8 decimals with a comma."""
        from abikalkki.output.formatting import format_preview

        assert format_preview(Decimal(4)) == "4,00000000"
        assert format_preview(Decimal("-2.5")) == "-2,50000000"

    def test_preview_rounds_half_up(self):
        """Test rounding of the ninth decimal."""
        from abikalkki.output.formatting import format_preview

        assert format_preview(Decimal("0.123456785")) == "0,12345679"
        assert format_preview(Decimal("-0.000000001")) == "0,00000000"

    def test_answer_trims_zeros(self):
        """Test committed answers drop trailing zeros."""
        from abikalkki.output.formatting import format_answer

        assert format_answer(Decimal("2.500")) == "2,5"
        assert format_answer(Decimal("100")) == "100"
        assert format_answer(Decimal("4.000")) == "4"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
