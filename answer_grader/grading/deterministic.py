"""
Deterministic grader.

Type-directed comparison of a submission against its canonical answer.
Pure: no I/O, no suspension, and no exceptions for any well-formed
payload/canonical pair. Also serves as the algebra fallback when the
equivalence oracle is disabled or fails.
"""

import logging

from answer_grader.answers.normalizer import expressions_match
from answer_grader.answers.numbers import parse_number
from answer_grader.grading.reasons import ReasonCode
from answer_grader.models import (
    AlgebraicCanonical,
    CanonicalAnswer,
    GradeResponse,
    MultipleChoiceCanonical,
    NumericCanonical,
    ShortTextCanonical,
    SubmissionPayload,
)

logger = logging.getLogger(__name__)

# Automatic tolerance: 0.5% of the canonical magnitude, and at least 0.01
# for canonical values smaller than 1
RELATIVE_TOLERANCE = 0.005
SMALL_VALUE_TOLERANCE = 0.01


def auto_tolerance(canonical_value: float) -> float:
    """Tolerance used when the canonical answer doesn't specify one."""
    magnitude = abs(canonical_value)
    return max(magnitude * RELATIVE_TOLERANCE, SMALL_VALUE_TOLERANCE if magnitude < 1 else 0.0)


def _verdict(passed: bool, pass_reason: str, fail_reason: str) -> GradeResponse:
    if passed:
        return GradeResponse.passed(pass_reason)
    return GradeResponse.failed(fail_reason)


class DeterministicGrader:
    """
    Grades submissions by exact, type-specific comparison.

    Rules:
    1. Kind mismatch is sent to review, never failed
    2. Numbers pass within an explicit or automatic tolerance
    3. Multiple choice compares trimmed letters case-sensitively
    4. Short text compares case-insensitively, or against the synonym list
    5. Algebra compares normalized expression strings
    """

    def grade(self, submission: SubmissionPayload, canonical: CanonicalAnswer) -> GradeResponse:
        """
        Grade a submission.

        Args:
            submission: The student's extracted answer.
            canonical: The teacher's canonical answer.

        Returns:
            The grading verdict.
        """
        if submission.kind != canonical.kind:
            logger.info(
                "Submission kind %s doesn't match canonical kind %s",
                submission.kind.value,
                canonical.kind.value,
            )
            return GradeResponse.review(ReasonCode.TYPE_MISMATCH)

        if isinstance(canonical, NumericCanonical):
            return self.grade_numeric(submission, canonical)
        if isinstance(canonical, MultipleChoiceCanonical):
            return self.grade_choice(submission, canonical)
        if isinstance(canonical, ShortTextCanonical):
            return self.grade_short_text(submission, canonical)
        if isinstance(canonical, AlgebraicCanonical):
            return self.grade_algebra(submission, canonical)

        return GradeResponse.review(ReasonCode.UNHANDLED_TYPE)

    def grade_numeric(
        self, submission: SubmissionPayload, canonical: NumericCanonical
    ) -> GradeResponse:
        """
        Compare numbers within tolerance.

        Units are reported as an informational second reason and never change
        the verdict.
        """
        answer = submission.numeric
        submitted = parse_number(answer.value if answer else "")
        correct = parse_number(canonical.value)
        if submitted is None or correct is None:
            logger.info(
                "Numeric parse failed (submitted=%r, canonical=%r)",
                answer.value if answer else "",
                canonical.value,
            )
            return GradeResponse.review(ReasonCode.NUM_PARSE_FAIL)

        if canonical.tolerance is not None:
            tolerance = canonical.tolerance
            within_reason = ReasonCode.NUM_WITHIN_CUSTOM_TOL
        else:
            tolerance = auto_tolerance(correct)
            within_reason = ReasonCode.NUM_WITHIN_AUTO_TOL

        within = abs(submitted - correct) <= tolerance
        reasons = [within_reason if within else ReasonCode.NUM_OUT_OF_TOL]

        if canonical.units:
            submitted_units = answer.units if answer else None
            if submitted_units and submitted_units == canonical.units:
                reasons.append(ReasonCode.UNITS_OK)
            else:
                reasons.append(ReasonCode.UNITS_MISSING_OR_MISMATCH)

        if within:
            return GradeResponse.passed(*reasons)
        return GradeResponse.failed(*reasons)

    def grade_choice(
        self, submission: SubmissionPayload, canonical: MultipleChoiceCanonical
    ) -> GradeResponse:
        """Exact letter match; "b" does not match "B"."""
        choice = (submission.mc.choice if submission.mc else "").strip()
        passed = bool(choice) and choice == canonical.letter
        return _verdict(passed, ReasonCode.MC_MATCH, ReasonCode.MC_MISMATCH)

    def grade_short_text(
        self, submission: SubmissionPayload, canonical: ShortTextCanonical
    ) -> GradeResponse:
        """Case-insensitive match against the text; synonyms are compared as given."""
        submitted = (submission.short.text if submission.short else "").strip().lower()
        correct = canonical.text.strip().lower()
        passed = bool(submitted) and (submitted == correct or submitted in canonical.synonyms)
        return _verdict(passed, ReasonCode.SHORT_MATCH, ReasonCode.SHORT_MISMATCH)

    def grade_algebra(
        self, submission: SubmissionPayload, canonical: AlgebraicCanonical
    ) -> GradeResponse:
        """Normalized string match against the expression or any synonym."""
        submitted = (submission.algebra.expression if submission.algebra else "").strip()
        passed = expressions_match(submitted, canonical.expression, canonical.synonyms)
        return _verdict(passed, ReasonCode.ALGEBRA_MATCH, ReasonCode.ALGEBRA_MISMATCH)


_default_grader = DeterministicGrader()


def grade_deterministic(
    submission: SubmissionPayload, canonical: CanonicalAnswer
) -> GradeResponse:
    """Grade with the default deterministic grader."""
    return _default_grader.grade(submission, canonical)
