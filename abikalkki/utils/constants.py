"""
Named constants available in expressions.

Values are exact SymPy objects so they survive symbolic simplification
(e.g. sin(pi) is exactly 0 in radian mode).
"""

import sympy as sp


MATH_CONSTANTS = {
    "pi": {
        "value": sp.pi,
        "name": "Ratio of a circle's circumference to its diameter",
    },
    "e": {
        "value": sp.E,
        "name": "Euler's number",
    },
}

# Session accumulators exposed as names
ANSWER_NAME = "ans"
INDEX_NAME = "ind"
