"""
Canonical answer authoring helpers.

Infers a canonical answer from the text a teacher types, using the same
classifier that grading uses, and renders the grading rules for display.
"""

from collections.abc import Sequence

from answer_grader.answers.classifier import classify
from answer_grader.canonical.parser import CanonicalParseError
from answer_grader.models import (
    AlgebraicCanonical,
    AnswerKind,
    CanonicalAnswer,
    MultipleChoiceCanonical,
    NumericCanonical,
    ShortTextCanonical,
)


def infer_canonical(
    text: str,
    tolerance: float | None = None,
    units: str | None = None,
    synonyms: Sequence[str] = (),
) -> CanonicalAnswer:
    """
    Build a canonical answer from a teacher's raw answer text.

    Tolerance and units only apply to numeric answers; synonyms only to
    short-text and algebraic answers.

    Args:
        text: The answer as typed by the teacher.
        tolerance: Optional absolute tolerance for numeric answers.
        units: Optional required units for numeric answers.
        synonyms: Alternate accepted answers.

    Returns:
        The inferred CanonicalAnswer.

    Raises:
        CanonicalParseError: If the text is empty.
    """
    trimmed = text.strip()
    kind = classify(trimmed)

    if kind == AnswerKind.MULTIPLE_CHOICE:
        return MultipleChoiceCanonical(letter=trimmed.upper())
    if kind == AnswerKind.NUMERIC:
        return NumericCanonical(value=trimmed, units=units, tolerance=tolerance)
    if kind == AnswerKind.ALGEBRAIC:
        return AlgebraicCanonical(expression=trimmed, synonyms=tuple(synonyms))
    if kind == AnswerKind.SHORT_TEXT:
        return ShortTextCanonical(text=trimmed.lower(), synonyms=tuple(synonyms))

    raise CanonicalParseError("Answer text is empty")


def describe_rules(canonical: CanonicalAnswer) -> str:
    """Render a one-line, teacher-facing summary of how an answer is graded."""
    if isinstance(canonical, NumericCanonical):
        rules = f"Number: {canonical.value}"
        if canonical.units:
            rules += f" (with units: {canonical.units})"
        if canonical.tolerance is not None:
            rules += f" (tolerance: ±{canonical.tolerance:g})"
        else:
            rules += " (tolerance: 0.5% default)"
        return rules

    if isinstance(canonical, MultipleChoiceCanonical):
        return f'Multiple Choice: Exactly "{canonical.letter}"'

    if isinstance(canonical, AlgebraicCanonical):
        return f'Algebra: "{canonical.expression}"' + _also_accepts(canonical.synonyms)

    if isinstance(canonical, ShortTextCanonical):
        return f'Text: "{canonical.text}"' + _also_accepts(canonical.synonyms)

    return "Unknown grading rules"


def _also_accepts(synonyms: tuple[str, ...]) -> str:
    return f" (also accepts: {', '.join(synonyms)})" if synonyms else ""
