"""
Canonical answer parser.

Stored canonical answers come in two shapes: a bare string value
(`{"type": "mc", "value": "B"}`) or an object value
(`{"type": "numeric", "value": {"num": "9.81", "units": "m/s^2"}}`).
Both are normalized here into the structured CanonicalAnswer variants, so
the graders never branch on shape.
"""

from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from answer_grader.models import (
    AlgebraicCanonical,
    AnswerKind,
    CanonicalAnswer,
    MultipleChoiceCanonical,
    NumericCanonical,
    ShortTextCanonical,
)


class CanonicalParseError(Exception):
    """Raised when a canonical answer can't be parsed."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        if self.errors:
            message = message + ":\n" + "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(message)


# Field that receives a bare string value, per kind
PRIMARY_FIELDS: dict[AnswerKind, str] = {
    AnswerKind.NUMERIC: "value",
    AnswerKind.MULTIPLE_CHOICE: "letter",
    AnswerKind.SHORT_TEXT: "text",
    AnswerKind.ALGEBRAIC: "expression",
}

# Legacy object field names
LEGACY_ALIASES: dict[AnswerKind, dict[str, str]] = {
    AnswerKind.NUMERIC: {"num": "value"},
    AnswerKind.MULTIPLE_CHOICE: {"choice": "letter", "value": "letter"},
    AnswerKind.SHORT_TEXT: {"value": "text"},
    AnswerKind.ALGEBRAIC: {"value": "expression"},
}

MODELS: dict[AnswerKind, type[BaseModel]] = {
    AnswerKind.NUMERIC: NumericCanonical,
    AnswerKind.MULTIPLE_CHOICE: MultipleChoiceCanonical,
    AnswerKind.SHORT_TEXT: ShortTextCanonical,
    AnswerKind.ALGEBRAIC: AlgebraicCanonical,
}

_canonical_adapter: TypeAdapter[CanonicalAnswer] = TypeAdapter(CanonicalAnswer)


class CanonicalParser:
    """
    Parses stored canonical answers into structured variants.

    Accepts:
    1. Legacy string values: {"type": "short", "value": "paris"}
    2. Legacy object values: {"type": "numeric", "value": {"num": "42", "tolerance": 0.5}}
    3. Structured records: {"kind": "algebra", "expression": "x^2", "synonyms": [...]}
    """

    def parse(self, data: dict[str, Any] | CanonicalAnswer) -> CanonicalAnswer:
        """
        Parse a canonical answer record.

        Args:
            data: Stored canonical answer, or an already-parsed variant.

        Returns:
            The structured CanonicalAnswer.

        Raises:
            CanonicalParseError: If the kind is unknown or fields are invalid.
        """
        if isinstance(data, tuple(MODELS.values())):
            return data  # type: ignore[return-value]
        if not isinstance(data, dict):
            raise CanonicalParseError(f"Canonical answer must be an object, got {type(data).__name__}")

        kind = self._parse_kind(data)
        fields = self._collect_fields(kind, data)

        if kind == AnswerKind.MULTIPLE_CHOICE and isinstance(fields.get("letter"), str):
            fields["letter"] = fields["letter"].strip().upper()
        if kind == AnswerKind.NUMERIC and isinstance(fields.get("value"), (int, float)):
            fields["value"] = str(fields["value"])

        try:
            return _canonical_adapter.validate_python({**fields, "kind": kind})
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'][1:]) or 'value'}: {err['msg']}"
                for err in e.errors()
            ]
            raise CanonicalParseError(f"Invalid {kind.value} canonical answer", errors) from e

    def _parse_kind(self, data: dict[str, Any]) -> AnswerKind:
        raw_kind = data.get("kind", data.get("type"))
        if raw_kind is None:
            raise CanonicalParseError("Canonical answer has no 'type' or 'kind'")
        try:
            kind = AnswerKind(raw_kind)
        except ValueError as e:
            raise CanonicalParseError(f"Unknown answer kind: {raw_kind!r}") from e
        if kind not in MODELS:
            raise CanonicalParseError(f"Canonical answers can't be of kind {kind.value!r}")
        return kind

    def _collect_fields(self, kind: AnswerKind, data: dict[str, Any]) -> dict[str, Any]:
        """Flatten a record's value into the variant's field names."""
        fields = {k: v for k, v in data.items() if k not in ("kind", "type", "value")}
        value = data.get("value")

        if isinstance(value, dict):
            fields = {**value, **fields}
        elif value is not None:
            fields.setdefault(PRIMARY_FIELDS[kind], value)

        for legacy, name in LEGACY_ALIASES[kind].items():
            if legacy in fields and name not in fields:
                fields[name] = fields.pop(legacy)

        # Legacy records store missing lists and units as null
        return {k: v for k, v in fields.items() if v is not None}


_default_parser = CanonicalParser()


def parse_canonical(data: dict[str, Any] | CanonicalAnswer) -> CanonicalAnswer:
    """Parse a canonical answer record with the default parser."""
    return _default_parser.parse(data)
