"""
Prompt builder for algebraic equivalence checks.

The oracle is asked for a one-word verdict (MATCH / NO_MATCH) followed by a
brief reason, which keeps replies short and easy to parse.
"""


class PromptBuilder:
    """Builds equivalence prompts for the LLM oracle."""

    SYSTEM_PROMPT = """You are a math tutor checking if two algebraic expressions are equivalent.

Rules:
- Return "MATCH" if the expressions are mathematically equivalent
- Return "NO_MATCH" if they are different
- Consider different notations: √ vs sqrt(), π vs pi, x² vs x^2, etc.
- Consider different ordering: 5x + 2√15 = 2√15 + 5x
- Consider implicit multiplication: 2πr = 2*pi*r
- Be strict: only match if truly mathematically equivalent
- Ignore whitespace and capitalization

Format: Just respond with "MATCH" or "NO_MATCH" followed by a brief reason."""

    @staticmethod
    def build_equivalence_prompt(
        submitted: str,
        correct: str,
        synonyms: tuple[str, ...] = (),
    ) -> str:
        """
        Build the user prompt for an equivalence check.

        Args:
            submitted: The student's expression.
            correct: The canonical expression.
            synonyms: Alternate accepted expressions.

        Returns:
            The formatted user prompt.
        """
        accepted = ", ".join((correct, *synonyms))
        return f"""Student wrote: "{submitted}"
Correct answer(s): {accepted}

Are these equivalent?"""

    @staticmethod
    def get_system_prompt() -> str:
        """Get the system prompt for equivalence checks."""
        return PromptBuilder.SYSTEM_PROMPT
