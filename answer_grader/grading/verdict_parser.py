"""
Parser for equivalence oracle replies.

The LLM answers with "MATCH" or "NO_MATCH" followed by a brief reason,
sometimes wrapped in quotes, markdown emphasis or a code block.
"""

import re

from answer_grader.grading.exceptions import OracleResponseError
from answer_grader.models import OracleVerdict

# A reply that starts with MATCH is a match, so "MATCHES" counts; the rest of
# the verdict word and any separator are dropped from the explanation
VERDICT_PATTERN = re.compile(
    r"^(NO[_ ]MATCH|MATCH)\w*\s*[-:.,]*\s*(.*)$", re.IGNORECASE | re.DOTALL
)

DEFAULT_REASON = "LLM decision"


class VerdictParser:
    """
    Parses oracle replies into OracleVerdicts.

    Ensures:
    1. The reply starts with a recognizable verdict word
    2. The explanation is kept as the verdict's reason
    """

    def __init__(self, confidence: float = 0.95):
        """
        Args:
            confidence: Confidence assigned to every LLM-decided verdict.
        """
        self._confidence = confidence

    def parse(self, response: str) -> OracleVerdict:
        """
        Parse an oracle reply.

        Args:
            response: Raw LLM reply.

        Returns:
            The parsed verdict.

        Raises:
            OracleResponseError: If the reply has no verdict word.
        """
        text = self._clean(response)
        match = VERDICT_PATTERN.match(text)
        if not match:
            raise OracleResponseError("No MATCH/NO_MATCH verdict in reply", raw_response=response)

        verdict, explanation = match.groups()
        explanation = " ".join(explanation.split())
        return OracleVerdict(
            match=verdict.upper() == "MATCH",
            confidence=self._confidence,
            reason=f"LLM: {explanation or DEFAULT_REASON}",
        )

    def _clean(self, response: str) -> str:
        """Strip code fences, markdown emphasis and surrounding quotes."""
        text = response.strip()
        fenced = re.search(r"```(?:\w+)?\s*([\s\S]*?)```", text)
        if fenced:
            text = fenced.group(1).strip()
        return text.strip("*_\"'` \n\t")
