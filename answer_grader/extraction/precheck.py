"""
Local precheck for typed answers.

Runs before any extraction service call to catch answers that obviously don't
fit the expected kind, so the student can be asked to re-enter them.
"""

import re
from typing import NamedTuple

from answer_grader.answers.classifier import classify
from answer_grader.answers.numbers import is_number_literal
from answer_grader.models import AnswerKind

SHORT_TEXT_PATTERN = re.compile(r"^[a-zA-Z ]{1,32}$")

# Confidence reported for a well-formed answer of each kind
PRECHECK_CONFIDENCE: dict[AnswerKind, float] = {
    AnswerKind.NUMERIC: 0.95,
    AnswerKind.MULTIPLE_CHOICE: 0.99,
    AnswerKind.SHORT_TEXT: 0.9,
    AnswerKind.ALGEBRAIC: 0.9,
}
REJECTED_CONFIDENCE = 0.2


class PrecheckResult(NamedTuple):
    """Outcome of a local precheck."""

    ok: bool
    confidence: float
    kind: AnswerKind | None
    text: str | None = None


def local_precheck(text: str, expected: AnswerKind) -> PrecheckResult:
    """
    Check whether typed text looks like an answer of the expected kind.

    Multiple-choice letters are uppercased in the returned text.

    Args:
        text: The typed answer.
        expected: The kind the problem expects.

    Returns:
        PrecheckResult; `ok` is False for empty or ill-formed answers.
    """
    trimmed = text.strip()
    if not trimmed:
        return PrecheckResult(ok=False, confidence=0.0, kind=None)

    if expected == AnswerKind.NUMERIC:
        ok = is_number_literal(trimmed)
    elif expected == AnswerKind.MULTIPLE_CHOICE:
        trimmed = trimmed.upper()
        ok = re.fullmatch(r"[A-D]", trimmed) is not None
    elif expected == AnswerKind.ALGEBRAIC:
        ok = classify(trimmed) == AnswerKind.ALGEBRAIC
    else:
        expected = AnswerKind.SHORT_TEXT
        ok = SHORT_TEXT_PATTERN.match(trimmed) is not None

    confidence = PRECHECK_CONFIDENCE[expected] if ok else REJECTED_CONFIDENCE
    return PrecheckResult(ok=ok, confidence=confidence, kind=expected, text=trimmed)
