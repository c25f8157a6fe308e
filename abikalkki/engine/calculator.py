"""
Expression evaluation using SymPy.

``calculate`` is the engine boundary: it never raises, it returns a
``CalcResult`` carrying either a ``Decimal`` or a ``MathError``.
"""

import ast
import io
import logging
import re
import tokenize
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Dict, Optional

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    eval_expr,
    stringify_expr,
    standard_transformations,
    implicit_multiplication,
    convert_xor,
    rationalize,
)

from ..models import MathError, MathErrorKind
from ..utils.constants import MATH_CONSTANTS, ANSWER_NAME, INDEX_NAME
from ..utils.errors import (
    CalculatorError,
    ExpressionSyntaxError,
    UndefinedIdentifierError,
    MathDomainError,
)
from .functions import build_namespace, get_function, guarded_power

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 32

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    convert_xor,
    rationalize,
)

# Display glyphs accepted as input (prettify emits some of these)
INPUT_GLYPHS = [
    ("·", "*"),
    ("×", "*"),
    ("÷", "/"),
    ("−", "-"),
    ("π", "pi"),
]

_DECIMAL_COMMA = re.compile(r"(?<=\d),(?=\d)")
# √ applied to a bare number or name, e.g. √9 or √ans
_ROOT_OPERAND = re.compile(r"√\s*(\d+(?:\.\d+)?|[A-Za-z_]\w*(?![\w(]))")
_ATTRIBUTE_ACCESS = re.compile(r"\.\s*[A-Za-z_]")

# Names the generated parser code needs; nothing else is reachable
_PARSER_GLOBALS = {
    "__builtins__": {},
    "Integer": sp.Integer,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "Symbol": sp.Symbol,
    "Function": sp.Function,
    "_power": guarded_power,
}


@dataclass
class CalcResult:
    """
    Result from an evaluation.

    Exactly one of ``value`` and ``error`` is set.
    """

    value: Optional[Decimal] = None
    error: Optional[MathError] = None

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, value: Decimal) -> "CalcResult":
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: MathError) -> "CalcResult":
        """Create a failed result."""
        return cls(error=error)


def normalize_input(expression: str) -> str:
    """
    Rewrite user input into parser syntax.

    Decimal commas become points, ';' separates arguments and display
    glyphs map back to their ASCII form. A root sign before a number or
    name wraps it: √9 becomes sqrt(9).
    """
    result = _DECIMAL_COMMA.sub(".", expression.strip())
    for glyph, replacement in INPUT_GLYPHS:
        result = result.replace(glyph, replacement)
    result = _ROOT_OPERAND.sub(r"sqrt(\1)", result)
    result = result.replace("√", "sqrt")
    result = result.replace(";", ",")
    return result


def _known_names() -> set:
    return set(MATH_CONSTANTS) | {ANSWER_NAME, INDEX_NAME}


def _check_names(text: str) -> None:
    """Reject unknown identifiers and anything that is not arithmetic."""
    if _ATTRIBUTE_ACCESS.search(text):
        raise ExpressionSyntaxError("Unexpected '.'")

    known = _known_names()
    try:
        for tok in tokenize.generate_tokens(io.StringIO(text).readline):
            if tok.type != tokenize.NAME:
                continue
            name = tok.string
            if name.startswith("_"):
                raise ExpressionSyntaxError(f"Invalid name '{name}'")
            if name not in known and get_function(name) is None:
                raise UndefinedIdentifierError(name)
    except (tokenize.TokenError, SyntaxError) as e:
        raise ExpressionSyntaxError(f"Incomplete expression: {e}")


class _PowerGuard(ast.NodeTransformer):
    """Route every ``**`` in the generated parser code through ``_power``."""

    def visit_BinOp(self, node):
        node = self.generic_visit(node)
        if isinstance(node.op, ast.Pow):
            return ast.Call(
                func=ast.Name(id="_power", ctx=ast.Load()),
                args=[node.left, node.right],
                keywords=[],
            )
        return node


def _parse(
    text: str, local_dict: Dict[str, object], global_dict: Dict[str, object]
):
    code = stringify_expr(text, local_dict, global_dict, TRANSFORMATIONS)
    tree = _PowerGuard().visit(ast.parse(code, mode="eval"))
    compiled = compile(ast.fix_missing_locations(tree), "<expression>", "eval")
    return eval_expr(compiled, local_dict, global_dict)


def _decimal_to_sympy(value: Decimal) -> sp.Rational:
    return sp.Rational(*value.as_integer_ratio())


def _to_decimal(expr: sp.Expr, precision: int) -> Decimal:
    """Convert a finite real SymPy number to Decimal."""
    if expr.is_Integer:
        return Decimal(int(expr))
    if expr.is_Rational:
        with localcontext() as ctx:
            ctx.prec = precision
            return Decimal(int(expr.p)) / Decimal(int(expr.q))

    numeric = sp.N(expr, precision)
    if not numeric.is_number or numeric.is_real is not True:
        raise MathDomainError("Result is not a real number")
    if numeric.has(sp.zoo, sp.oo, -sp.oo, sp.nan):
        raise MathDomainError("Result is undefined")
    return Decimal(str(numeric))


def evaluate(
    expression: str,
    answer: Decimal,
    index: Decimal,
    angle_mode: str = "deg",
    precision: int = DEFAULT_PRECISION,
) -> Decimal:
    """
    Evaluate an expression, raising ``CalculatorError`` on failure.

    Args:
        expression: Raw user input
        answer: Value of ``ans``
        index: Value of ``ind``
        angle_mode: "deg" or "rad"
        precision: Significant digits for irrational results

    Returns:
        The result as a Decimal
    """
    text = normalize_input(expression)
    if not text:
        raise ExpressionSyntaxError("Empty expression")

    _check_names(text)

    local_dict: Dict[str, object] = {
        name: info["value"] for name, info in MATH_CONSTANTS.items()
    }
    local_dict[ANSWER_NAME] = _decimal_to_sympy(answer)
    local_dict[INDEX_NAME] = _decimal_to_sympy(index)
    namespace = build_namespace(angle_mode)
    local_dict.update(namespace)

    global_dict = dict(_PARSER_GLOBALS)
    # n! shares fact's domain and size limit
    global_dict["factorial"] = namespace["fact"]

    expr = _parse(text, local_dict, global_dict)

    if not isinstance(expr, sp.Expr):
        raise ExpressionSyntaxError(f"Not a number: {expr!r}")

    undefined = expr.atoms(AppliedUndef) | expr.free_symbols
    if undefined:
        name = sorted(
            u.func.__name__ if isinstance(u, AppliedUndef) else str(u)
            for u in undefined
        )[0]
        raise UndefinedIdentifierError(name)

    if expr.has(sp.zoo):
        raise MathDomainError("Division by zero")
    if expr.has(sp.nan):
        raise MathDomainError("Result is undefined")
    if expr.has(sp.oo, -sp.oo):
        raise MathDomainError("Result is infinite")

    return _to_decimal(expr, precision)


def calculate(
    expression: str,
    answer: Decimal,
    index: Decimal,
    angle_mode: str = "deg",
    precision: int = DEFAULT_PRECISION,
) -> CalcResult:
    """
    Evaluate an expression without raising.

    Same arguments as ``evaluate``.
    """
    try:
        value = evaluate(expression, answer, index, angle_mode, precision)
    except CalculatorError as e:
        return CalcResult.failure(e.to_math_error())
    except (ZeroDivisionError, OverflowError) as e:
        return CalcResult.failure(MathError(kind=MathErrorKind.DOMAIN, detail=str(e)))
    except Exception as e:
        # the parser surfaces tokenizer, syntax and type errors as-is
        logger.debug("Parser rejected %r: %s: %s", expression, type(e).__name__, e)
        return CalcResult.failure(MathError(kind=MathErrorKind.SYNTAX, detail=str(e)))

    return CalcResult.success(value)
