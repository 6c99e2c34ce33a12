"""
Semantic equivalence oracle.

The orchestrator depends on the EquivalenceOracle protocol only, so tests and
alternative backends can substitute any object with a matching `check`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from answer_grader.config import Settings, get_settings
from answer_grader.grading.llm_client import LLMClient
from answer_grader.grading.prompt_builder import PromptBuilder
from answer_grader.grading.verdict_parser import VerdictParser
from answer_grader.models import OracleVerdict

logger = logging.getLogger(__name__)


@runtime_checkable
class EquivalenceOracle(Protocol):
    """Decides whether a submitted expression is equivalent to an accepted one."""

    async def check(
        self, submitted: str, correct: str, synonyms: tuple[str, ...] = ()
    ) -> OracleVerdict:
        """
        Raises:
            OracleError: If no verdict could be obtained.
        """
        ...


class BaseEquivalenceOracle(ABC):
    """
    Oracle base that settles trivial cases without an external call.

    Empty input never matches; an exact match of the trimmed expression or
    of a synonym always does. Everything else goes to `_judge`.
    """

    async def check(
        self, submitted: str, correct: str, synonyms: tuple[str, ...] = ()
    ) -> OracleVerdict:
        submitted = submitted.strip()
        correct = correct.strip()

        if not submitted or not correct:
            return OracleVerdict(match=False, confidence=1.0, reason="Empty expression")

        if submitted == correct:
            return OracleVerdict(match=True, confidence=1.0, reason="Exact match")

        if any(submitted == s.strip() for s in synonyms):
            return OracleVerdict(match=True, confidence=1.0, reason="Synonym match")

        return await self._judge(submitted, correct, synonyms)

    @abstractmethod
    async def _judge(
        self, submitted: str, correct: str, synonyms: tuple[str, ...]
    ) -> OracleVerdict:
        """Decide a non-trivial comparison."""


class LLMEquivalenceOracle(BaseEquivalenceOracle):
    """Asks an LLM whether two expressions are mathematically equivalent."""

    def __init__(self, settings: Settings | None = None, client: LLMClient | None = None):
        """
        Args:
            settings: Configuration settings. Uses global settings if not provided.
            client: LLM client. Built from settings if not provided.
        """
        self._settings = settings or get_settings()
        self._client = client or LLMClient(self._settings)
        self._parser = VerdictParser(confidence=self._settings.oracle_llm_confidence)

    async def _judge(
        self, submitted: str, correct: str, synonyms: tuple[str, ...]
    ) -> OracleVerdict:
        """
        Raises:
            LLMError: If the API call fails.
            OracleResponseError: If the reply has no verdict.
        """
        reply = await self._client.complete(
            system_prompt=PromptBuilder.get_system_prompt(),
            user_prompt=PromptBuilder.build_equivalence_prompt(submitted, correct, synonyms),
        )
        verdict = self._parser.parse(reply)
        logger.debug("Oracle verdict for %r vs %r: %s", submitted, correct, verdict)
        return verdict

    async def health_check(self) -> bool:
        return await self._client.health_check()
