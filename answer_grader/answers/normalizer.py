"""
Algebraic expression normalization.

Rewrites expression text into a canonical string so that notational variants
(x² vs x^2, 2x vs 2*x, √x vs sqrt(x)) compare equal. This is a string
heuristic used when the equivalence oracle is not consulted; it does not
parse or evaluate the expression.

Implicit multiplication splits runs of single-letter variables, so "xy" becomes
"x*y". The names in KNOWN_NAMES (pi and ln) are kept whole.
"""

import re

SUPERSCRIPT_DIGITS = str.maketrans(
    {
        "⁰": "^0",
        "¹": "^1",
        "²": "^2",
        "³": "^3",
        "⁴": "^4",
        "⁵": "^5",
        "⁶": "^6",
        "⁷": "^7",
        "⁸": "^8",
        "⁹": "^9",
    }
)

OPERATOR_GLYPHS = str.maketrans({"×": "*", "·": "*", "•": "*", "÷": "/"})

# (pattern, replacement) pairs, applied in order
ROOT_AND_CONSTANT_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"√([0-9]+)"), r"sqrt(\1)"),
    (re.compile(r"√([a-zA-Z])"), r"sqrt(\1)"),
    (re.compile(r"√\(([^)]+)\)"), r"sqrt(\1)"),
    (re.compile(r"√"), "sqrt"),
    (re.compile(r"∛"), "cbrt"),
    (re.compile(r"π"), "pi"),
    (re.compile(r"∞"), "infinity"),
)

SQRT_ARGUMENT_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"sqrt\s*([0-9]+)"), r"sqrt(\1)"),
    (re.compile(r"sqrt\s*([a-z])"), r"sqrt(\1)"),
)

WHITESPACE = re.compile(r"\s+")

# Two-letter names that are never split into a product
KNOWN_NAMES = ("pi", "ln")

IMPLICIT_MULTIPLICATION_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"([0-9]+)([a-z])"), r"\1*\2"),
    (re.compile(r"([a-z])([0-9]+)"), r"\1*\2"),
    # Only isolated two-letter runs: "xy" splits, "sin" and "sqrt" don't
    (
        re.compile(r"(?<![a-z])(?!" + "|".join(KNOWN_NAMES) + r")([a-z])([a-z])(?![a-z])"),
        r"\1*\2",
    ),
)


def _apply(rules: tuple[tuple[re.Pattern[str], str], ...], text: str) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def normalize(expression: str) -> str:
    """
    Normalize an algebraic expression for exact-match comparison.

    The steps run in a fixed order; implicit multiplication is inserted last so
    that it sees the ASCII names produced by glyph substitution.

    Args:
        expression: Raw expression text.

    Returns:
        The normalized expression. Idempotent.
    """
    result = expression.strip().lower()
    result = _apply(ROOT_AND_CONSTANT_RULES, result)
    result = result.translate(SUPERSCRIPT_DIGITS)
    result = result.translate(OPERATOR_GLYPHS)
    result = _apply(SQRT_ARGUMENT_RULES, result)
    result = WHITESPACE.sub("", result)
    # Removing whitespace can join "sq rt x" into a bare "sqrtx"
    result = _apply(SQRT_ARGUMENT_RULES, result)
    return _apply(IMPLICIT_MULTIPLICATION_RULES, result)


def expressions_match(submitted: str, correct: str, synonyms: tuple[str, ...] = ()) -> bool:
    """Check whether a submitted expression normalizes to the answer or a synonym."""
    normalized = normalize(submitted)
    if not normalized:
        return False
    return normalized == normalize(correct) or normalized in {normalize(s) for s in synonyms}
