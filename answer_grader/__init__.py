"""
Answer Grader - typed answer grading for free-form student responses.

This package classifies raw answer text, compares numeric, multiple-choice,
short-text and algebraic answers against a teacher's canonical answer, and
consults an LLM equivalence oracle for algebra with a deterministic fallback.
"""

__version__ = "1.0.0"
__author__ = "Answer Grader Team"
