"""
Display canonicalization of expressions.

``prettify`` is textual: it never evaluates, so "2+2" stays "2+2".
Every rule's output is left alone by every rule, which makes the whole
transformation idempotent.
"""

import re

# Applied in order; whitespace goes first so "p i" and "* *" collapse
# before the token rules see them.
PRETTIFY_RULES = [
    (re.compile(r"\s+"), ""),
    (re.compile(r"\*\*"), "^"),
    (re.compile(r"\*"), "·"),
    (re.compile(r"(?<![A-Za-z_])pi(?![A-Za-z0-9_])"), "π"),
    (re.compile(r"(?<![A-Za-z_])sqrt(?![A-Za-z0-9_])"), "√"),
]


def prettify(expression: str) -> str:
    """Canonical display form of a raw expression."""
    result = expression
    for pattern, replacement in PRETTIFY_RULES:
        result = pattern.sub(replacement, result)
    return result
