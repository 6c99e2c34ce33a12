"""
Number parsing for numeric answers.

Accepts integers, decimals, scientific notation and simple fractions.
Unparseable input yields None so callers can route it to review.
"""

import math
import re

# Decimal or scientific literal: "42", "-3.", ".5", "1.5e-3"
NUMBER_PATTERN = re.compile(r"^[-+]?(?:[0-9]+\.?[0-9]*|[0-9]*\.?[0-9]+)(?:e[-+]?[0-9]+)?$", re.IGNORECASE)

# Simple fraction: "3/4", "-1/2"
FRACTION_PATTERN = re.compile(r"^([-+]?[0-9]+)/([0-9]+)$")


def parse_number(text: str) -> float | None:
    """
    Parse a numeric answer.

    Args:
        text: Raw answer text.

    Returns:
        The finite value, or None when the text is not a number, the
        fraction has a zero denominator, or the value overflows or has too
        many digits to convert.
    """
    trimmed = text.strip()

    fraction = FRACTION_PATTERN.match(trimmed)
    if fraction:
        try:
            value = int(fraction.group(1)) / int(fraction.group(2))
        except (ValueError, OverflowError, ZeroDivisionError):
            # ValueError: digit runs past the interpreter's int conversion limit
            return None
        return value if math.isfinite(value) else None

    if not NUMBER_PATTERN.match(trimmed):
        return None

    value = float(trimmed)
    return value if math.isfinite(value) else None


def is_number_literal(text: str) -> bool:
    """Check whether trimmed text is a number or a fraction with a non-zero denominator."""
    trimmed = text.strip()
    fraction = FRACTION_PATTERN.match(trimmed)
    if fraction:
        return fraction.group(2).strip("0") != ""
    return bool(NUMBER_PATTERN.match(trimmed))
