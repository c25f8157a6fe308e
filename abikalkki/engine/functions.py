"""
Built-in calculator functions and their documentation.

Each ``MathFunction`` carries its arity and usage text, so the same
registry drives evaluation and the documentation hints shown while a
call is still open.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import sympy as sp

from ..utils.errors import ArityError, MathDomainError


@dataclass(frozen=True)
class FunctionDoc:
    """Documentation entry for a function."""

    name: str
    usage: str
    description: str


class MathFunction:
    """
    A named function callable from expressions.

    Args:
        name: Identifier used in expressions
        impl: Implementation taking SymPy arguments
        min_args: Minimum number of arguments
        max_args: Maximum number of arguments (None for variadic)
        usage: Signature shown as a hint, e.g. "root(x; n)"
        description: One-line description
        angle_aware: If True, ``impl`` receives the angle mode first
    """

    def __init__(
        self,
        name: str,
        impl: Callable[..., sp.Basic],
        min_args: int,
        max_args: Optional[int],
        usage: str,
        description: str,
        angle_aware: bool = False,
    ):
        self.name = name
        self.impl = impl
        self.min_args = min_args
        self.max_args = max_args
        self.doc = FunctionDoc(name=name, usage=usage, description=description)
        self.angle_aware = angle_aware

    @property
    def arity_text(self) -> str:
        if self.max_args is None:
            return f"at least {self.min_args}"
        if self.min_args == self.max_args:
            return str(self.min_args)
        return f"{self.min_args}-{self.max_args}"

    def check_arity(self, count: int) -> None:
        too_many = self.max_args is not None and count > self.max_args
        if count < self.min_args or too_many:
            raise ArityError(self.name, self.arity_text, count)

    def bind(self, angle_mode: str) -> Callable[..., sp.Basic]:
        """Return a plain callable for the parser namespace."""

        def call(*args):
            self.check_arity(len(args))
            if self.angle_aware:
                return self.impl(angle_mode, *args)
            return self.impl(*args)

        call.__name__ = self.name
        return call


# === Helpers ===

# Exact results beyond this many digits are refused instead of computed
MAX_RESULT_DIGITS = 10**5

# Largest argument of fact, nCr and nPr (20000! has 77338 digits)
MAX_FACTORIAL_ARGUMENT = 20000


def _too_large() -> MathDomainError:
    return MathDomainError("Result is too large")


def _log_size(base: sp.Basic) -> float:
    """Natural log of the largest integer an exact power of ``base`` carries."""
    if base.is_Rational:
        return math.log(int(max(abs(base.p), base.q)))
    return abs(float(sp.log(sp.Abs(base))))


def guarded_power(base, exponent) -> sp.Basic:
    """
    ``base ** exponent``, refusing powers whose exact value would have
    more than ``MAX_RESULT_DIGITS`` digits (in the numerator or the
    denominator).
    """
    base, exponent = sp.sympify(base), sp.sympify(exponent)
    if base.is_number and exponent.is_number and not (
        base.is_zero or sp.Abs(base) == 1
    ):
        try:
            digits = abs(float(exponent)) * _log_size(base) / math.log(10)
        except OverflowError:
            raise _too_large()
        except TypeError:
            # complex operands, rejected later as non-real
            digits = 0
        if digits > MAX_RESULT_DIGITS:
            raise _too_large()
    return base**exponent


def _to_radians(angle_mode: str, x: sp.Basic) -> sp.Basic:
    return x * sp.pi / 180 if angle_mode == "deg" else x


def _from_radians(angle_mode: str, x: sp.Basic) -> sp.Basic:
    return x * 180 / sp.pi if angle_mode == "deg" else x


def _require_natural(name: str, *values: sp.Basic) -> None:
    for value in values:
        if not (value.is_integer and value.is_nonnegative):
            raise MathDomainError(f"{name} requires non-negative integers")


def _require_integer(name: str, *values: sp.Basic) -> None:
    for value in values:
        if not value.is_integer:
            raise MathDomainError(f"{name} requires integers")


def _require_size(limit: int, *values: sp.Basic) -> None:
    if any(sp.Abs(value) > limit for value in values):
        raise _too_large()


# === Implementations ===


def _sqrt(x):
    if x.is_negative:
        raise MathDomainError("Square root of a negative number")
    return sp.sqrt(x)


def _root(x, n):
    if n.is_zero:
        raise MathDomainError("Zeroth root is undefined")
    if x.is_negative:
        if n.is_integer and n.is_odd:
            return sp.real_root(x, n)
        raise MathDomainError("Even root of a negative number")
    return x ** (1 / n)


def _ln(x):
    if x.is_nonpositive:
        raise MathDomainError("Logarithm of a non-positive number")
    return sp.log(x)


def _log(x, base=sp.Integer(10)):
    if x.is_nonpositive:
        raise MathDomainError("Logarithm of a non-positive number")
    if base.is_nonpositive or base == 1:
        raise MathDomainError("Invalid logarithm base")
    return sp.log(x, base)


def _round(x, places=sp.Integer(0)):
    _require_integer("round", places)
    _require_size(MAX_RESULT_DIGITS, places)
    scale = sp.Integer(10) ** places
    # half away from zero
    return sp.sign(x) * sp.floor(sp.Abs(x) * scale + sp.Rational(1, 2)) / scale


def _fact(n):
    _require_natural("fact", n)
    _require_size(MAX_FACTORIAL_ARGUMENT, n)
    return sp.factorial(n)


def _ncr(n, k):
    _require_natural("nCr", n, k)
    _require_size(MAX_FACTORIAL_ARGUMENT, n)
    return sp.binomial(n, k)


def _npr(n, k):
    _require_natural("nPr", n, k)
    _require_size(MAX_FACTORIAL_ARGUMENT, n)
    if k > n:
        return sp.Integer(0)
    return sp.factorial(n) / sp.factorial(n - k)


def _gcd(*values):
    _require_integer("gcd", *values)
    return sp.igcd(*values)


def _lcm(*values):
    _require_integer("lcm", *values)
    return sp.ilcm(*values)


def _asin(mode, x):
    if sp.Abs(x) > 1:
        raise MathDomainError("asin is defined on [-1, 1]")
    return _from_radians(mode, sp.asin(x))


def _acos(mode, x):
    if sp.Abs(x) > 1:
        raise MathDomainError("acos is defined on [-1, 1]")
    return _from_radians(mode, sp.acos(x))


FUNCTIONS: List[MathFunction] = [
    # Trigonometry (angle mode aware)
    MathFunction(
        "sin",
        lambda mode, x: sp.sin(_to_radians(mode, x)),
        1, 1, "sin(x)", "Sine of angle x", angle_aware=True,
    ),
    MathFunction(
        "cos",
        lambda mode, x: sp.cos(_to_radians(mode, x)),
        1, 1, "cos(x)", "Cosine of angle x", angle_aware=True,
    ),
    MathFunction(
        "tan",
        lambda mode, x: sp.tan(_to_radians(mode, x)),
        1, 1, "tan(x)", "Tangent of angle x", angle_aware=True,
    ),
    MathFunction(
        "asin", _asin, 1, 1, "asin(x)", "Inverse sine, returns an angle",
        angle_aware=True,
    ),
    MathFunction(
        "acos", _acos, 1, 1, "acos(x)", "Inverse cosine, returns an angle",
        angle_aware=True,
    ),
    MathFunction(
        "atan",
        lambda mode, x: _from_radians(mode, sp.atan(x)),
        1, 1, "atan(x)", "Inverse tangent, returns an angle", angle_aware=True,
    ),
    # Roots, powers and logarithms
    MathFunction("sqrt", _sqrt, 1, 1, "sqrt(x)", "Square root of x"),
    MathFunction("root", _root, 2, 2, "root(x; n)", "n-th root of x"),
    MathFunction("ln", _ln, 1, 1, "ln(x)", "Natural logarithm of x"),
    MathFunction(
        "log", _log, 1, 2, "log(x; b)", "Logarithm of x in base b (default 10)"
    ),
    MathFunction("exp", sp.exp, 1, 1, "exp(x)", "e raised to the power x"),
    # Rounding and sign
    MathFunction("abs", sp.Abs, 1, 1, "abs(x)", "Absolute value of x"),
    MathFunction(
        "round", _round, 1, 2, "round(x; n)", "Round x to n decimal places"
    ),
    MathFunction("floor", sp.floor, 1, 1, "floor(x)", "Largest integer <= x"),
    MathFunction("ceil", sp.ceiling, 1, 1, "ceil(x)", "Smallest integer >= x"),
    # Combinatorics and integers
    MathFunction("fact", _fact, 1, 1, "fact(n)", "Factorial n!"),
    MathFunction("nCr", _ncr, 2, 2, "nCr(n; k)", "Combinations of k from n"),
    MathFunction("nPr", _npr, 2, 2, "nPr(n; k)", "Permutations of k from n"),
    MathFunction("gcd", _gcd, 2, None, "gcd(a; b; ...)", "Greatest common divisor"),
    MathFunction("lcm", _lcm, 2, None, "lcm(a; b; ...)", "Least common multiple"),
    MathFunction("min", sp.Min, 1, None, "min(a; b; ...)", "Smallest argument"),
    MathFunction("max", sp.Max, 1, None, "max(a; b; ...)", "Largest argument"),
    # Angle conversion
    MathFunction(
        "deg", lambda x: x * 180 / sp.pi, 1, 1, "deg(x)", "Radians to degrees"
    ),
    MathFunction(
        "rad", lambda x: x * sp.pi / 180, 1, 1, "rad(x)", "Degrees to radians"
    ),
]

_REGISTRY: Dict[str, MathFunction] = {f.name: f for f in FUNCTIONS}


def get_function(name: str) -> Optional[MathFunction]:
    return _REGISTRY.get(name)


def get_documentation(name: str) -> Optional[FunctionDoc]:
    """Look up the documentation entry for a function name."""
    function = _REGISTRY.get(name)
    return function.doc if function else None


def list_functions() -> List[FunctionDoc]:
    """All documentation entries, in registry order."""
    return [f.doc for f in FUNCTIONS]


def build_namespace(angle_mode: str) -> Dict[str, Callable[..., sp.Basic]]:
    """Callables for every function, bound to an angle mode."""
    return {f.name: f.bind(angle_mode) for f in FUNCTIONS}
