"""
Answer kind inference from raw text.

The same rules classify a teacher's canonical answer at authoring time and a
student's typed answer at grading time.
"""

import logging
import re

from answer_grader.answers.numbers import is_number_literal
from answer_grader.models import AnswerKind

logger = logging.getLogger(__name__)

CHOICE_PATTERN = re.compile(r"^[A-D]$", re.IGNORECASE)

# Matched against lowercased text. Any letter qualifies, so most single
# words classify as algebra before the short-text catch-all.
ALGEBRA_PATTERN = re.compile(r"[a-z]|√|∛|π|∞|\^|\*\*|sin|cos|tan|log|ln|\+|-|\*|/|\(|\)|=")


def classify(text: str) -> AnswerKind:
    """
    Infer the answer kind of raw text.

    Rules are evaluated in priority order, first match wins:
    multiple choice, numeric, algebraic, short text. Empty text is unknown.

    Args:
        text: Raw answer text.

    Returns:
        The inferred AnswerKind.
    """
    trimmed = text.strip()

    if CHOICE_PATTERN.match(trimmed):
        kind = AnswerKind.MULTIPLE_CHOICE
    elif is_number_literal(trimmed):
        kind = AnswerKind.NUMERIC
    elif ALGEBRA_PATTERN.search(trimmed.lower()):
        kind = AnswerKind.ALGEBRAIC
    elif trimmed:
        kind = AnswerKind.SHORT_TEXT
    else:
        kind = AnswerKind.UNKNOWN

    logger.debug("Classified %r as %s", trimmed, kind.value)
    return kind
