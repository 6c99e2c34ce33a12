"""
Submission builders and oracle fakes shared by the test modules.
"""

from answer_grader.grading.exceptions import LLMError
from answer_grader.grading.oracle import BaseEquivalenceOracle
from answer_grader.models import AnswerKind, OracleVerdict, SubmissionPayload


# ==============================================================================
# Submission Helpers
# ==============================================================================


def numeric(value: str, units: str | None = None) -> SubmissionPayload:
    return SubmissionPayload.from_value(AnswerKind.NUMERIC, value, units=units)


def choice(letter: str) -> SubmissionPayload:
    return SubmissionPayload.from_value(AnswerKind.MULTIPLE_CHOICE, letter)


def short(text: str) -> SubmissionPayload:
    return SubmissionPayload.from_value(AnswerKind.SHORT_TEXT, text)


def algebra(expression: str) -> SubmissionPayload:
    return SubmissionPayload.from_value(AnswerKind.ALGEBRAIC, expression)


# ==============================================================================
# Oracle Fakes
# ==============================================================================


class ScriptedOracle:
    """Oracle returning a fixed verdict and recording every call."""

    def __init__(self, verdict: OracleVerdict):
        self.verdict = verdict
        self.calls: list[tuple[str, str, tuple[str, ...]]] = []

    async def check(
        self, submitted: str, correct: str, synonyms: tuple[str, ...] = ()
    ) -> OracleVerdict:
        self.calls.append((submitted, correct, synonyms))
        return self.verdict


class FailingOracle:
    """Oracle whose every call fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error or LLMError("Connection failed after 2 retries", retryable=True)
        self.calls = 0

    async def check(
        self, submitted: str, correct: str, synonyms: tuple[str, ...] = ()
    ) -> OracleVerdict:
        self.calls += 1
        raise self.error


class ScriptedJudgeOracle(BaseEquivalenceOracle):
    """Base oracle whose non-trivial comparisons return a fixed verdict."""

    def __init__(self, verdict: OracleVerdict):
        self.verdict = verdict
        self.judged: list[tuple[str, str, tuple[str, ...]]] = []

    async def _judge(
        self, submitted: str, correct: str, synonyms: tuple[str, ...]
    ) -> OracleVerdict:
        self.judged.append((submitted, correct, synonyms))
        return self.verdict
