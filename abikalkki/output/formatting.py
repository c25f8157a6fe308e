"""
Number formatting for the hint line and the history list.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext


def format_preview(value: Decimal, places: int = 8, separator: str = ",") -> str:
    """
    Format a speculative result with exactly ``places`` fractional digits.

    Rounds half up and uses ``separator`` as decimal mark:
    Decimal(4) -> "4,00000000".
    """
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the places
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return format(rounded, "f").replace(".", separator)


def format_answer(value: Decimal, separator: str = ",") -> str:
    """Format a committed result without trailing zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text.replace(".", separator)


def format_history_line(record, separator: str = ",") -> str:
    """Single-line text for a history record: "2+2 = 4"."""
    return f"{record.expression} = {format_answer(record.answer, separator)}"
