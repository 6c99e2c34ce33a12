"""
Unit tests for canonical answer handling.

Tests parsing of stored records in both legacy shapes, inference from a
teacher's answer text, and the rendered grading rules.
"""

import pytest

from answer_grader.canonical import (
    CanonicalParseError,
    CanonicalParser,
    describe_rules,
    infer_canonical,
    parse_canonical,
)
from answer_grader.models import (
    AlgebraicCanonical,
    MultipleChoiceCanonical,
    NumericCanonical,
    ShortTextCanonical,
)


class TestCanonicalParser:
    """Tests for CanonicalParser."""

    def test_parse_legacy_numeric_object(self) -> None:
        canonical = parse_canonical(
            {"type": "numeric", "value": {"num": "9.81", "units": "m/s^2", "tolerance": 0.05}}
        )

        assert canonical == NumericCanonical(value="9.81", units="m/s^2", tolerance=0.05)

    def test_parse_legacy_numeric_string(self) -> None:
        canonical = parse_canonical({"type": "numeric", "value": "42"})

        assert canonical == NumericCanonical(value="42")

    def test_parse_numeric_number_value(self) -> None:
        canonical = parse_canonical({"type": "numeric", "value": {"num": 9.81}})

        assert isinstance(canonical, NumericCanonical)
        assert canonical.value == "9.81"

    def test_parse_legacy_choice(self) -> None:
        canonical = parse_canonical({"type": "mc", "value": " b "})

        assert canonical == MultipleChoiceCanonical(letter="B")

    def test_parse_legacy_choice_object(self) -> None:
        canonical = parse_canonical({"type": "mc", "value": {"choice": "C"}})

        assert canonical == MultipleChoiceCanonical(letter="C")

    def test_parse_legacy_short_text(self) -> None:
        canonical = parse_canonical(
            {"type": "short", "value": "paris", "synonyms": ["Paris, France"]}
        )

        assert canonical == ShortTextCanonical(text="paris", synonyms=("Paris, France",))

    def test_parse_structured_algebra(self) -> None:
        canonical = parse_canonical(
            {"kind": "algebra", "expression": "x^2 + 4x + 4", "synonyms": ["(x+2)^2"]}
        )

        assert canonical == AlgebraicCanonical(expression="x^2 + 4x + 4", synonyms=("(x+2)^2",))

    def test_null_fields_are_ignored(self) -> None:
        canonical = parse_canonical(
            {"type": "algebra", "value": {"value": "2x", "synonyms": None}, "units": None}
        )

        assert canonical == AlgebraicCanonical(expression="2x")

    def test_parsed_variant_passes_through(self) -> None:
        canonical = ShortTextCanonical(text="paris")

        assert CanonicalParser().parse(canonical) is canonical

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"value": "B"}, "no 'type' or 'kind'"),
            ({"type": "essay", "value": "x"}, "Unknown answer kind"),
            ({"type": "unknown", "value": "x"}, "can't be of kind"),
        ],
    )
    def test_invalid_kind(self, data: dict, message: str) -> None:
        with pytest.raises(CanonicalParseError, match=message):
            parse_canonical(data)

    def test_non_object_is_rejected(self) -> None:
        with pytest.raises(CanonicalParseError, match="must be an object"):
            parse_canonical(["numeric", "9.81"])  # type: ignore[arg-type]

    def test_invalid_letter_lists_field_error(self) -> None:
        with pytest.raises(CanonicalParseError) as exc_info:
            parse_canonical({"type": "mc", "value": "E"})

        assert "Invalid mc canonical answer" in str(exc_info.value)
        assert len(exc_info.value.errors) == 1
        assert exc_info.value.errors[0].startswith("letter:")

    def test_negative_tolerance_is_rejected(self) -> None:
        with pytest.raises(CanonicalParseError) as exc_info:
            parse_canonical({"type": "numeric", "value": {"num": "1", "tolerance": -0.1}})

        assert exc_info.value.errors[0].startswith("tolerance:")

    def test_blank_value_is_rejected(self) -> None:
        with pytest.raises(CanonicalParseError):
            parse_canonical({"type": "short", "value": "   "})


class TestInferCanonical:
    """Tests for inferring canonical answers from answer text."""

    def test_letter_becomes_multiple_choice(self) -> None:
        assert infer_canonical(" c ") == MultipleChoiceCanonical(letter="C")

    def test_number_keeps_tolerance_and_units(self) -> None:
        canonical = infer_canonical("9.81", tolerance=0.05, units="m/s^2")

        assert canonical == NumericCanonical(value="9.81", units="m/s^2", tolerance=0.05)

    def test_expression_keeps_synonyms(self) -> None:
        canonical = infer_canonical("x^2 + 4x + 4", synonyms=["(x+2)^2"])

        assert canonical == AlgebraicCanonical(expression="x^2 + 4x + 4", synonyms=("(x+2)^2",))

    def test_other_text_is_lowercased_short_text(self) -> None:
        """Only text without letters or operators falls through to short text."""
        assert infer_canonical("42!") == ShortTextCanonical(text="42!")

    def test_units_do_not_apply_to_expressions(self) -> None:
        canonical = infer_canonical("2πr", units="cm")

        assert isinstance(canonical, AlgebraicCanonical)

    def test_empty_text_is_rejected(self) -> None:
        with pytest.raises(CanonicalParseError, match="empty"):
            infer_canonical("  ")


class TestDescribeRules:
    """Tests for the teacher-facing rule summary."""

    @pytest.mark.parametrize(
        "canonical, expected",
        [
            (NumericCanonical(value="9.81"), "Number: 9.81 (tolerance: 0.5% default)"),
            (
                NumericCanonical(value="9.81", units="m/s^2", tolerance=0.05),
                "Number: 9.81 (with units: m/s^2) (tolerance: ±0.05)",
            ),
            (MultipleChoiceCanonical(letter="B"), 'Multiple Choice: Exactly "B"'),
            (
                AlgebraicCanonical(expression="x^2", synonyms=("x*x", "x²")),
                'Algebra: "x^2" (also accepts: x*x, x²)',
            ),
            (ShortTextCanonical(text="paris"), 'Text: "paris"'),
        ],
    )
    def test_describe_rules(self, canonical, expected: str) -> None:
        assert describe_rules(canonical) == expected
