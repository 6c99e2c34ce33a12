"""
Grading Module.

Deterministic comparison, the LLM equivalence oracle and the orchestrator
that combines them.
"""

from answer_grader.grading.deterministic import DeterministicGrader, grade_deterministic
from answer_grader.grading.exceptions import LLMError, OracleError, OracleResponseError
from answer_grader.grading.llm_client import LLMClient
from answer_grader.grading.oracle import (
    BaseEquivalenceOracle,
    EquivalenceOracle,
    LLMEquivalenceOracle,
)
from answer_grader.grading.orchestrator import (
    GradingOrchestrator,
    create_orchestrator,
    get_default_orchestrator,
    grade_with_oracle,
)
from answer_grader.grading.prompt_builder import PromptBuilder
from answer_grader.grading.reasons import ReasonCode
from answer_grader.grading.verdict_parser import VerdictParser

__all__ = [
    "BaseEquivalenceOracle",
    "DeterministicGrader",
    "EquivalenceOracle",
    "GradingOrchestrator",
    "LLMClient",
    "LLMEquivalenceOracle",
    "LLMError",
    "OracleError",
    "OracleResponseError",
    "PromptBuilder",
    "ReasonCode",
    "VerdictParser",
    "create_orchestrator",
    "get_default_orchestrator",
    "grade_deterministic",
    "grade_with_oracle",
]
