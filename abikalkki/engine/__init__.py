"""Engine layer: evaluation, documentation and input/output conversions."""

from decimal import Decimal
from typing import Optional

from ..config import Settings, DEFAULT_SETTINGS
from ..input.latex import latex_to_math
from ..input.scanner import get_open_function
from ..models import MathError
from ..output.prettify import prettify
from ..utils.errors import parse_error
from .calculator import CalcResult, calculate
from .functions import FunctionDoc, get_documentation, list_functions

__all__ = [
    "CalcResult",
    "ExpressionEngine",
    "FunctionDoc",
    "calculate",
    "get_documentation",
    "list_functions",
]


class ExpressionEngine:
    """
    The collaborator the session controller evaluates through.

    Bundles the stateless engine functions with the session's settings.
    Tests substitute their own object with the same methods.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def calculate(
        self, expression: str, answer: Decimal, index: Decimal
    ) -> CalcResult:
        return calculate(
            expression,
            answer,
            index,
            self.settings.angle_mode,
            self.settings.precision,
        )

    def prettify(self, expression: str) -> str:
        return prettify(expression)

    def latex_to_math(self, text: str) -> str:
        return latex_to_math(text)

    def get_open_function(self, buffer: str) -> Optional[str]:
        return get_open_function(buffer)

    def get_documentation(self, name: str) -> Optional[FunctionDoc]:
        return get_documentation(name)

    def parse_error(self, error: MathError) -> str:
        return parse_error(error)
