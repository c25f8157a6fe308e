"""
Incomplete-call scanner.

Finds the function whose argument list is still open at the end of the
buffer, so the preview can show its usage instead of an error.
"""

from typing import Optional

# Glyphs that stand for a function name
GLYPH_FUNCTIONS = {"√": "sqrt"}


def _identifier_before(buffer: str, pos: int) -> Optional[str]:
    """Return the identifier ending right before ``buffer[pos]``."""
    if pos > 0 and buffer[pos - 1] in GLYPH_FUNCTIONS:
        return GLYPH_FUNCTIONS[buffer[pos - 1]]

    start = pos
    while start > 0 and (buffer[start - 1].isalnum() or buffer[start - 1] == "_"):
        start -= 1

    # "2sin(" is implicit multiplication, the identifier starts at the letter
    name = buffer[start:pos].lstrip("0123456789")
    return name or None


def get_open_function(buffer: str) -> Optional[str]:
    """
    Identifier of the innermost unclosed function call, or None.

    Scans from the end keeping a parenthesis depth. Bare groups such as
    the "(" in "max(1; (2" are skipped and the scan continues outward.

    Examples:
        get_open_function("sin(")           -> "sin"
        get_open_function("sin(30)")        -> None
        get_open_function("max(1; cos(2)")  -> "max"
    """
    depth = 0
    for pos in range(len(buffer) - 1, -1, -1):
        char = buffer[pos]
        if char == ")":
            depth += 1
        elif char == "(":
            if depth > 0:
                depth -= 1
                continue
            name = _identifier_before(buffer, pos)
            if name is not None:
                return name
    return None
