"""
Extraction Boundary Module.

Prechecks typed answers, gates extraction service output and builds
submission payloads for grading.
"""

from answer_grader.extraction.precheck import PrecheckResult, local_precheck
from answer_grader.extraction.submission import (
    ExtractedAnswer,
    ExtractionResult,
    GradeRequest,
    accept_extraction,
    build_submission,
)

__all__ = [
    "ExtractedAnswer",
    "ExtractionResult",
    "GradeRequest",
    "PrecheckResult",
    "accept_extraction",
    "build_submission",
    "local_precheck",
]
