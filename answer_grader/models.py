"""
Pydantic models for the Answer Grader.

These models define the strict schemas for:
- Canonical answers authored by teachers (one variant per answer kind)
- Student submission payloads as produced by the extraction boundary
- Grading verdicts and equivalence oracle verdicts

All models are frozen: a grading call never mutates its inputs.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ==============================================================================
# Enumerations
# ==============================================================================


class AnswerKind(str, Enum):
    """Kind of answer; selects the canonical shape and comparator."""

    NUMERIC = "numeric"
    MULTIPLE_CHOICE = "mc"
    SHORT_TEXT = "short"
    ALGEBRAIC = "algebra"
    UNKNOWN = "unknown"


class GradeResult(str, Enum):
    """Terminal grading outcome."""

    PASS = "PASS"
    FAIL = "FAIL"
    REVIEW = "REVIEW"  # Needs human adjudication, not an error


class AnswerSource(str, Enum):
    """Where the student's answer text came from."""

    VISION = "vision"
    TYPED = "typed"
    TYPED_FALLBACK = "typed_fallback"  # Typed after vision extraction failed


def _strip_required(v: str) -> str:
    stripped = v.strip()
    if not stripped:
        raise ValueError("must not be empty or whitespace-only")
    return stripped


def _strip_optional(v: str | None) -> str | None:
    if v is None:
        return None
    return v.strip() or None


# ==============================================================================
# Canonical Answer Models
# ==============================================================================


class NumericCanonical(BaseModel):
    """
    Numeric ground truth.

    `tolerance` is an absolute deviation; when unset the grader derives one
    from the magnitude of the value.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal[AnswerKind.NUMERIC] = AnswerKind.NUMERIC

    value: str = Field(
        ...,
        description="Canonical number as written by the teacher (e.g. '9.81', '3/4')",
    )

    units: str | None = Field(
        default=None,
        description="Required units, compared by exact string equality",
    )

    tolerance: float | None = Field(
        default=None,
        ge=0,
        description="Explicit absolute tolerance",
    )

    @field_validator("value")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("units")
    @classmethod
    def strip_units(cls, v: str | None) -> str | None:
        """Blank units mean no units are required."""
        return _strip_optional(v)


class MultipleChoiceCanonical(BaseModel):
    """Multiple-choice ground truth: a single letter A-D."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[AnswerKind.MULTIPLE_CHOICE] = AnswerKind.MULTIPLE_CHOICE

    letter: str = Field(
        ...,
        pattern=r"^[A-D]$",
        description="Correct choice letter",
    )

    @field_validator("letter", mode="before")
    @classmethod
    def strip_letter(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


class ShortTextCanonical(BaseModel):
    """Short-text ground truth with alternate acceptable answers."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[AnswerKind.SHORT_TEXT] = AnswerKind.SHORT_TEXT

    text: str = Field(
        ...,
        description="Canonical answer text",
    )

    synonyms: tuple[str, ...] = Field(
        default=(),
        description="Alternate acceptable answers, compared as given",
    )

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class AlgebraicCanonical(BaseModel):
    """Algebraic expression ground truth with equivalent alternate forms."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[AnswerKind.ALGEBRAIC] = AnswerKind.ALGEBRAIC

    expression: str = Field(
        ...,
        description="Canonical expression",
    )

    synonyms: tuple[str, ...] = Field(
        default=(),
        description="Alternate accepted expressions",
    )

    @field_validator("expression")
    @classmethod
    def strip_expression(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("synonyms")
    @classmethod
    def strip_synonyms(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(s.strip() for s in v)


CanonicalAnswer = Annotated[
    Union[NumericCanonical, MultipleChoiceCanonical, ShortTextCanonical, AlgebraicCanonical],
    Field(discriminator="kind"),
]


# ==============================================================================
# Submission Models
# ==============================================================================


class NumericAnswer(BaseModel):
    """Student's numeric answer and optional units."""

    model_config = ConfigDict(frozen=True)

    value: str = ""
    units: str | None = None


class ChoiceAnswer(BaseModel):
    """Student's multiple-choice letter."""

    model_config = ConfigDict(frozen=True)

    choice: str = ""


class TextAnswer(BaseModel):
    """Student's short-text answer."""

    model_config = ConfigDict(frozen=True)

    text: str = ""


class ExpressionAnswer(BaseModel):
    """Student's algebraic expression."""

    model_config = ConfigDict(frozen=True)

    expression: str = ""


_SUB_PAYLOAD_FIELDS: dict[AnswerKind, str] = {
    AnswerKind.NUMERIC: "numeric",
    AnswerKind.MULTIPLE_CHOICE: "mc",
    AnswerKind.SHORT_TEXT: "short",
    AnswerKind.ALGEBRAIC: "algebra",
}


class SubmissionPayload(BaseModel):
    """
    A student's extracted answer, tagged with its kind.

    At most one kind-specific sub-payload is populated and it must be the one
    named by `kind`. A missing sub-payload grades as an empty answer. The kind
    may differ from the canonical answer's kind; the grader reports that as
    TYPE_MISMATCH rather than raising.
    """

    model_config = ConfigDict(frozen=True)

    kind: AnswerKind

    source: AnswerSource = Field(
        default=AnswerSource.TYPED,
        description="How the answer was obtained",
    )

    numeric: NumericAnswer | None = None
    mc: ChoiceAnswer | None = None
    short: TextAnswer | None = None
    algebra: ExpressionAnswer | None = None

    confidence: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Extraction confidence; informational only",
    )

    @model_validator(mode="after")
    def validate_sub_payload(self) -> "SubmissionPayload":
        """Ensure the populated sub-payload matches the declared kind."""
        populated = [
            name for name in _SUB_PAYLOAD_FIELDS.values() if getattr(self, name) is not None
        ]
        if len(populated) > 1:
            raise ValueError(f"Only one answer sub-payload may be set, got: {populated}")
        expected = _SUB_PAYLOAD_FIELDS.get(self.kind)
        if populated and populated[0] != expected:
            raise ValueError(
                f"Sub-payload '{populated[0]}' does not match answer kind '{self.kind.value}'"
            )
        return self

    @classmethod
    def from_value(
        cls,
        kind: AnswerKind,
        value: str,
        units: str | None = None,
        source: AnswerSource = AnswerSource.TYPED,
        confidence: float | None = None,
    ) -> "SubmissionPayload":
        """Build a payload holding `value` in the sub-payload for `kind`."""
        sub_payloads: dict[str, BaseModel] = {}
        if kind == AnswerKind.NUMERIC:
            sub_payloads["numeric"] = NumericAnswer(value=value, units=units)
        elif kind == AnswerKind.MULTIPLE_CHOICE:
            sub_payloads["mc"] = ChoiceAnswer(choice=value)
        elif kind == AnswerKind.SHORT_TEXT:
            sub_payloads["short"] = TextAnswer(text=value)
        elif kind == AnswerKind.ALGEBRAIC:
            sub_payloads["algebra"] = ExpressionAnswer(expression=value)
        return cls(kind=kind, source=source, confidence=confidence, **sub_payloads)


# ==============================================================================
# Verdict Models
# ==============================================================================


class GradeResponse(BaseModel):
    """
    Grading verdict.

    `reasons` holds short machine-readable codes; oracle verdicts append the
    oracle's explanation after the code.
    """

    model_config = ConfigDict(frozen=True)

    result: GradeResult

    score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="1.0 for PASS, 0.0 for FAIL, 0.0 or 0.5 for REVIEW",
    )

    reasons: tuple[str, ...] = Field(
        default=(),
        description="Ordered reason codes",
    )

    @classmethod
    def passed(cls, *reasons: str) -> "GradeResponse":
        return cls(result=GradeResult.PASS, score=1.0, reasons=reasons)

    @classmethod
    def failed(cls, *reasons: str) -> "GradeResponse":
        return cls(result=GradeResult.FAIL, score=0.0, reasons=reasons)

    @classmethod
    def review(cls, *reasons: str, score: float = 0.0) -> "GradeResponse":
        return cls(result=GradeResult.REVIEW, score=score, reasons=reasons)


class OracleVerdict(BaseModel):
    """Equivalence oracle answer for a pair of expressions."""

    model_config = ConfigDict(frozen=True)

    match: bool

    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
    )

    reason: str = Field(
        default="",
        description="Short explanation of the decision",
    )
