"""
CSS length helpers.

Small, pure helpers for the length strings that flow through style configs
("10pt", "84mm", "24px", "40%"). Used by the style compiler for font scaling,
page margins and the main-column width.
"""

import re
from typing import Optional, Tuple, Union

# Lengths eligible for numeric arithmetic (unitless means mm)
ARITHMETIC_LENGTH = re.compile(r"^(\d+(?:\.\d+)?)(mm|px|rem|%)?$")

# Any leading number followed by an optional unit suffix
SCALABLE_LENGTH = re.compile(r"^\s*(-?\d*\.?\d+)\s*([a-zA-Z%]*)\s*$")

BARE_NUMBER = re.compile(r"^\d+(\.\d+)?$")


def format_number(value: float) -> str:
    """Format a float the way a browser would print it (126.0 -> '126')."""
    rounded = round(value, 4)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.4f}".rstrip("0").rstrip(".")


def parse_length(value: str) -> Optional[Tuple[float, str]]:
    """
    Parse a length string into (number, unit).

    Returns None when the string isn't a single number with an optional unit.

    Example:
        >>> parse_length("10pt")
        (10.0, 'pt')
    """
    if value is None:
        return None
    match = SCALABLE_LENGTH.match(str(value))
    if not match:
        return None
    return float(match.group(1)), match.group(2)


def scale_length(scale: float, base: str, precision: int = 1) -> Optional[str]:
    """
    Multiply a length by a scale factor, keeping the base unit.

    The result is formatted to a fixed number of decimals, so
    scale_length(3.2, "10pt") == "32.0pt" and scale_length(3.2, "12px") == "38.4px".
    Returns None if `base` can't be parsed.
    """
    parsed = parse_length(base)
    if parsed is None:
        return None
    number, unit = parsed
    return f"{number * float(scale):.{precision}f}{unit}"


def ensure_units(value: Union[str, int, float, None], default: str, unit: str = "mm") -> str:
    """
    Return a length that carries a unit.

    Bare numbers get `unit` appended; empty values get `default`.
    Zero is a valid value, not an empty one.
    """
    if value is None or value == "":
        return default
    text = str(value).strip()
    if not text:
        return default
    if BARE_NUMBER.match(text):
        return f"{text}{unit}"
    return text


def subtract_lengths(minuend: str, subtrahend: str) -> str:
    """
    Compute `minuend - subtrahend` for CSS lengths.

    When both operands share a unit that isn't a percentage, subtract numerically
    and keep the unit ("210mm" - "84mm" -> "126mm"). Otherwise emit a deferred
    calc() expression so the layout engine does the arithmetic.
    """
    left = ARITHMETIC_LENGTH.match(str(minuend).strip())
    right = ARITHMETIC_LENGTH.match(str(subtrahend).strip())

    if left and right:
        left_unit = left.group(2) or "mm"
        right_unit = right.group(2) or "mm"
        if left_unit == right_unit and left_unit != "%":
            difference = float(left.group(1)) - float(right.group(1))
            return f"{format_number(difference)}{left_unit}"

    return f"calc({minuend} - {subtrahend})"
