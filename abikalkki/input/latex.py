"""
LaTeX to calculator syntax conversion.

Pasted LaTeX (e.g. from a formula editor) is parsed with SymPy's LaTeX
parser and printed back in the calculator's own syntax. Conversion never
fails: text the parser rejects is passed through with its backslashes
dropped, and the engine reports what is wrong with it.
"""

import logging
import re

import sympy as sp
from sympy.parsing.latex import parse_latex
from sympy.parsing.latex.errors import LaTeXParsingError
from sympy.printing.str import StrPrinter

logger = logging.getLogger(__name__)


class CalculatorPrinter(StrPrinter):
    """
    Print SymPy expressions as calculator input.

    Function arguments are separated by ';' and SymPy names are mapped to
    the calculator's: binomial -> nCr, factorial -> fact, log -> ln/log.
    """

    _default_settings = dict(
        StrPrinter._default_settings, order="none", full_prec=False
    )

    FUNCTION_NAMES = {
        "Abs": "abs",
        "binomial": "nCr",
        "factorial": "fact",
        "ceiling": "ceil",
        "Min": "min",
        "Max": "max",
    }

    def _call(self, name: str, args) -> str:
        return f"{name}({'; '.join(self._print(arg) for arg in args)})"

    def _print_Function(self, expr):
        name = expr.func.__name__
        return self._call(self.FUNCTION_NAMES.get(name, name), expr.args)

    _print_Abs = _print_Function
    _print_factorial = _print_Function
    _print_binomial = _print_Function
    _print_ceiling = _print_Function
    _print_Min = _print_Function
    _print_Max = _print_Function

    def _print_log(self, expr):
        if len(expr.args) == 1 or expr.args[1] == sp.E:
            return self._call("ln", expr.args[:1])
        if expr.args[1] == 10:
            return self._call("log", expr.args[:1])
        return self._call("log", expr.args)

    def _print_Exp1(self, expr):
        return "e"

    def _print_Pow(self, expr, rational=False):
        exponent = expr.exp
        if exponent.is_Rational and exponent.p == 1 and exponent.q > 2:
            return self._call("root", (expr.base, exponent.q))
        return super()._print_Pow(expr, rational)


class LatexConverter:
    """
    Convert LaTeX markup into calculator expressions.

    Usage:
        converter = LatexConverter()
        converter.convert(r"\\frac{1}{2}")  # "1/2"
    """

    DELIMITERS = [r"\[", r"\]", "$$", "$", r"\(", r"\)"]

    # Applied before parsing, in order
    PRE_REPLACEMENTS = [
        (r"\{,\}", "."),  # Finnish decimal comma, e.g. 1{,}5
        (r"(?<=\d),(?=\d)", "."),
        (r"\^\s*\{?\s*\\circ\s*\}?", ""),  # degrees are the default unit
        (r"\\degree|°", ""),
        (r"\\%", "/100"),
        (r"\\(?:q?quad|[,;:!> ])", " "),
        (r"~", " "),
    ]

    # Retried when the parser rejects the first attempt
    COMMAND_FIXES = [
        (r"\\[dtc]frac", r"\\frac"),
        (r"\\cdotp", r"\\cdot"),
        (r"\\lg\b", r"\\log"),
        (r"\\operatorname\{(\w+)\}", r"\\\1"),
        (r"\\(?:text|mathrm|mathit)\{([^{}]*)\}", r"\1"),
    ]

    def __init__(self):
        self.printer = CalculatorPrinter()

    def convert(self, latex: str) -> str:
        """Convert a LaTeX string. Never raises."""
        cleaned = self._preprocess(latex)
        if not cleaned:
            return ""

        expr = self._parse(cleaned)
        if expr is None:
            fixed = self._apply_fixes(cleaned)
            expr = self._parse(fixed) if fixed != cleaned else None
            if expr is None:
                return self._strip_commands(fixed)

        return self.printer.doprint(expr).replace("**", "^")

    def _parse(self, latex: str):
        """SymPy expression for ``latex``, or None if the parser rejects it."""
        try:
            return parse_latex(latex)
        except LaTeXParsingError as e:
            logger.debug("LaTeX parser rejected %r: %s", latex, e)
        except Exception as e:
            logger.debug("Unexpected LaTeX parsing error on %r: %s", latex, e)
        return None

    def _preprocess(self, latex: str) -> str:
        """Strip math delimiters and spacing, normalize decimal commas."""
        result = latex.strip()
        for delim in self.DELIMITERS:
            result = result.replace(delim, "")
        for pattern, replacement in self.PRE_REPLACEMENTS:
            result = re.sub(pattern, replacement, result)
        return " ".join(result.split())

    def _apply_fixes(self, latex: str) -> str:
        result = latex
        for pattern, replacement in self.COMMAND_FIXES:
            result = re.sub(pattern, replacement, result)
        return result

    def _strip_commands(self, latex: str) -> str:
        return " ".join(latex.replace("\\", " ").split())


def latex_to_math(text: str) -> str:
    """
    Convenience function: convert LaTeX to calculator syntax.

    Never raises; malformed input maps to a best-effort string.
    """
    return LatexConverter().convert(text)
