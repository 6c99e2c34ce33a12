"""
Extraction boundary models and submission construction.

The extraction service (handwriting or typed-answer recognition) reports a
value, optional units, a confidence and an abstain flag. Low-confidence or
abstained extractions never reach the grader; the student is asked to
rewrite the answer instead.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from answer_grader.canonical.parser import parse_canonical
from answer_grader.models import AnswerKind, AnswerSource, CanonicalAnswer, SubmissionPayload

logger = logging.getLogger(__name__)


class ExtractionResult(BaseModel):
    """Raw output of the extraction service."""

    model_config = ConfigDict(frozen=True)

    value: str = ""
    units: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    abstain: bool = False


class ExtractedAnswer(BaseModel):
    """An accepted answer, ready to be graded."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str = Field(..., alias="extractedValue")
    units: str | None = Field(default=None, alias="extractedUnits")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    source: AnswerSource = AnswerSource.TYPED

    @field_validator("units")
    @classmethod
    def blank_units_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class GradeRequest(BaseModel):
    """
    A grading request as received from the application layer.

    The canonical answer may use any stored shape; it is normalized on
    validation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    submission_id: str | None = Field(default=None, alias="submissionId")
    payload: ExtractedAnswer
    canonical: CanonicalAnswer

    @field_validator("canonical", mode="before")
    @classmethod
    def parse_stored_canonical(cls, v: Any) -> Any:
        return parse_canonical(v)

    def to_submission(self) -> SubmissionPayload:
        """Build the submission payload for this request's canonical kind."""
        return build_submission(self.payload, self.canonical.kind)


def accept_extraction(
    result: ExtractionResult,
    threshold: float,
    source: AnswerSource = AnswerSource.VISION,
) -> ExtractedAnswer | None:
    """
    Gate an extraction result before grading.

    Args:
        result: Extraction service output.
        threshold: Minimum acceptable confidence.
        source: Provenance recorded on the accepted answer.

    Returns:
        The accepted answer, or None when the student must rewrite it.
    """
    value = result.value.strip()
    if result.abstain or not result.confidence or result.confidence < threshold or not value:
        logger.info(
            "Extraction rejected (value=%r, confidence=%.2f, abstain=%s)",
            value,
            result.confidence,
            result.abstain,
        )
        return None

    return ExtractedAnswer(
        value=value,
        units=result.units,
        confidence=result.confidence,
        source=source,
    )


def build_submission(answer: ExtractedAnswer, kind: AnswerKind) -> SubmissionPayload:
    """
    Place an extracted value into the sub-payload for the expected kind.

    Units are only carried for numeric answers.
    """
    return SubmissionPayload.from_value(
        kind,
        answer.value,
        units=answer.units if kind == AnswerKind.NUMERIC else None,
        source=answer.source,
        confidence=answer.confidence,
    )
