"""Machine-readable reason codes attached to grading verdicts."""


class ReasonCode:
    """Reason code constants."""

    TYPE_MISMATCH = "TYPE_MISMATCH"
    UNHANDLED_TYPE = "UNHANDLED_TYPE"

    NUM_PARSE_FAIL = "NUM_PARSE_FAIL"
    NUM_WITHIN_CUSTOM_TOL = "NUM_WITHIN_CUSTOM_TOL"
    NUM_WITHIN_AUTO_TOL = "NUM_WITHIN_AUTO_TOL"
    NUM_OUT_OF_TOL = "NUM_OUT_OF_TOL"
    UNITS_OK = "UNITS_OK"
    UNITS_MISSING_OR_MISMATCH = "UNITS_MISSING_OR_MISMATCH"

    MC_MATCH = "MC_MATCH"
    MC_MISMATCH = "MC_MISMATCH"

    SHORT_MATCH = "SHORT_MATCH"
    SHORT_MISMATCH = "SHORT_MISMATCH"

    ALGEBRA_MATCH = "ALGEBRA_MATCH"
    ALGEBRA_MISMATCH = "ALGEBRA_MISMATCH"
    EMPTY_SUBMISSION = "EMPTY_SUBMISSION"

    # Oracle verdicts carry the oracle's explanation: "ALGEBRA_LLM_MATCH: <reason>"
    ALGEBRA_LLM_MATCH = "ALGEBRA_LLM_MATCH"
    ALGEBRA_LLM_UNCERTAIN = "ALGEBRA_LLM_UNCERTAIN"
    ALGEBRA_LLM_MISMATCH = "ALGEBRA_LLM_MISMATCH"


def with_explanation(code: str, explanation: str) -> str:
    """Attach a free-text explanation to a reason code."""
    return f"{code}: {explanation}" if explanation else code
