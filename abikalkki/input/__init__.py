"""Input layer: LaTeX conversion and open-call scanning."""

from .latex import LatexConverter, latex_to_math
from .scanner import get_open_function

__all__ = ["LatexConverter", "latex_to_math", "get_open_function"]
