"""
Grading orchestrator - the top-level entry point.

Routes non-algebra answers to the deterministic grader and algebra answers to
the equivalence oracle, gating its verdict by confidence. An oracle failure
degrades to the deterministic normalized-string comparison; it is never
propagated to the caller.
"""

import logging
from functools import lru_cache

from answer_grader.config import GraderConfig, Settings, get_settings
from answer_grader.grading.deterministic import DeterministicGrader
from answer_grader.grading.exceptions import OracleError
from answer_grader.grading.oracle import EquivalenceOracle, LLMEquivalenceOracle
from answer_grader.grading.reasons import ReasonCode, with_explanation
from answer_grader.models import (
    AlgebraicCanonical,
    AnswerKind,
    CanonicalAnswer,
    GradeResponse,
    OracleVerdict,
    SubmissionPayload,
)

logger = logging.getLogger(__name__)

REVIEW_SCORE = 0.5


class GradingOrchestrator:
    """
    Tiered grader: deterministic comparison, then the oracle for algebra.

    Stateless between calls; one instance can grade concurrent submissions.
    """

    def __init__(
        self,
        oracle: EquivalenceOracle | None = None,
        config: GraderConfig | None = None,
        deterministic: DeterministicGrader | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            oracle: Equivalence oracle for algebra. Without one, algebra is
                graded by normalized comparison.
            config: Oracle usage and confidence thresholds.
            deterministic: Deterministic grader. A default one is created if not provided.
        """
        self._config = config or GraderConfig()
        self._oracle = oracle if self._config.use_oracle else None
        self._deterministic = deterministic or DeterministicGrader()

    @property
    def config(self) -> GraderConfig:
        return self._config

    @property
    def uses_oracle(self) -> bool:
        return self._oracle is not None

    async def grade(
        self, submission: SubmissionPayload, canonical: CanonicalAnswer
    ) -> GradeResponse:
        """
        Grade a submission against its canonical answer.

        Args:
            submission: The student's extracted answer.
            canonical: The teacher's canonical answer.

        Returns:
            The grading verdict. Never raises for oracle failures.
        """
        if submission.kind != AnswerKind.ALGEBRAIC or not isinstance(
            canonical, AlgebraicCanonical
        ):
            return self._deterministic.grade(submission, canonical)

        submitted = (submission.algebra.expression if submission.algebra else "").strip()
        if not submitted:
            return GradeResponse.failed(ReasonCode.EMPTY_SUBMISSION)

        if self._oracle is None:
            return self._deterministic.grade_algebra(submission, canonical)

        try:
            verdict = await self._oracle.check(submitted, canonical.expression, canonical.synonyms)
        except OracleError as e:
            logger.warning("Equivalence oracle failed, using normalized comparison: %s", e)
            return self._deterministic.grade_algebra(submission, canonical)
        except Exception:
            logger.exception("Unexpected equivalence oracle error, using normalized comparison")
            return self._deterministic.grade_algebra(submission, canonical)

        return self.apply_thresholds(verdict)

    def apply_thresholds(self, verdict: OracleVerdict) -> GradeResponse:
        """
        Map an oracle verdict to a grade.

        A confident match passes, a less confident match goes to review, and
        anything else fails.
        """
        if verdict.match and verdict.confidence >= self._config.pass_confidence_threshold:
            return GradeResponse.passed(
                with_explanation(ReasonCode.ALGEBRA_LLM_MATCH, verdict.reason)
            )
        if verdict.match and verdict.confidence >= self._config.review_confidence_threshold:
            return GradeResponse.review(
                with_explanation(ReasonCode.ALGEBRA_LLM_UNCERTAIN, verdict.reason),
                score=REVIEW_SCORE,
            )
        return GradeResponse.failed(
            with_explanation(ReasonCode.ALGEBRA_LLM_MISMATCH, verdict.reason)
        )


def create_orchestrator(settings: Settings | None = None) -> GradingOrchestrator:
    """
    Build an orchestrator from settings.

    The LLM oracle is attached only when it is enabled and an API key is
    configured; otherwise algebra is graded deterministically.
    """
    settings = settings or get_settings()
    config = GraderConfig.from_settings(settings)

    oracle: EquivalenceOracle | None = None
    if config.use_oracle:
        if settings.oracle_available:
            oracle = LLMEquivalenceOracle(settings)
        else:
            logger.warning("No oracle API key configured; algebra uses normalized comparison")
            config = config.model_copy(update={"use_oracle": False})

    return GradingOrchestrator(oracle=oracle, config=config)


@lru_cache()
def get_default_orchestrator() -> GradingOrchestrator:
    """
    Get the shared orchestrator built from global settings.

    Every default grading call shares its oracle client.
    """
    return create_orchestrator()


async def grade_with_oracle(
    submission: SubmissionPayload,
    canonical: CanonicalAnswer,
    orchestrator: GradingOrchestrator | None = None,
) -> GradeResponse:
    """Grade with the given orchestrator, or the shared default one."""
    orchestrator = orchestrator or get_default_orchestrator()
    return await orchestrator.grade(submission, canonical)
