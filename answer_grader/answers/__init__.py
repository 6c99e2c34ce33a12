"""
Answer Text Module.

Classification, number parsing and expression normalization shared by the
authoring and grading paths.
"""

from answer_grader.answers.classifier import classify
from answer_grader.answers.normalizer import expressions_match, normalize
from answer_grader.answers.numbers import is_number_literal, parse_number

__all__ = [
    "classify",
    "expressions_match",
    "is_number_literal",
    "normalize",
    "parse_number",
]
