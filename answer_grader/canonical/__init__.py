"""
Canonical Answer Module.

Parsing of stored canonical answers and inference of new ones from a
teacher's answer text.
"""

from answer_grader.canonical.builder import describe_rules, infer_canonical
from answer_grader.canonical.parser import CanonicalParseError, CanonicalParser, parse_canonical

__all__ = [
    "CanonicalParseError",
    "CanonicalParser",
    "describe_rules",
    "infer_canonical",
    "parse_canonical",
]
