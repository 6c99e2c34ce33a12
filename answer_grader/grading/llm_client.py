"""
Async chat-completion client for the equivalence oracle.

Talks to any OpenAI-compatible endpoint through the OpenAI SDK. Transient
failures are retried with capped exponential backoff.
"""

import asyncio
import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError, RateLimitError

from answer_grader.config import Settings, get_settings
from answer_grader.grading.exceptions import LLMError

logger = logging.getLogger(__name__)


def is_transient(error: OpenAIError) -> bool:
    """Rate limits, dropped connections and 5xx responses are worth retrying."""
    if isinstance(error, (RateLimitError, APIConnectionError)):
        return True
    return isinstance(error, APIStatusError) and error.status_code >= 500


class LLMClient:
    """
    Client for the oracle's chat completion endpoint.

    One instance can serve concurrent requests; it holds no per-request state.
    """

    BACKOFF_BASE = 1.0  # seconds
    BACKOFF_CAP = 10.0

    def __init__(self, settings: Settings | None = None):
        """
        Args:
            settings: Oracle endpoint settings. Uses global settings if not provided.

        Raises:
            LLMError: If no API key is configured.
        """
        self._settings = settings or get_settings()
        if not self._settings.openai_api_key:
            raise LLMError("OPENAI_API_KEY is not set; the equivalence oracle is unavailable")

        self._client = AsyncOpenAI(
            api_key=self._settings.openai_api_key,
            base_url=self._settings.openai_base_url,
        )
        self._max_retries = self._settings.oracle_max_retries

    @property
    def model(self) -> str:
        return self._settings.oracle_model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Send one system/user exchange and return the reply text, stripped.

        Temperature and token limit default to the oracle settings.

        Raises:
            LLMError: On an empty reply, a non-transient API error, or when
                transient errors outlast the retry budget.
        """
        request: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": (
                self._settings.oracle_temperature if temperature is None else temperature
            ),
            "max_tokens": self._settings.oracle_max_tokens if max_tokens is None else max_tokens,
        }

        response = await self._create_with_retry(request)
        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise LLMError("Empty response from LLM")
        return content.strip()

    async def _create_with_retry(self, request: dict[str, Any]) -> Any:
        attempt = 0
        while True:
            try:
                return await self._client.chat.completions.create(**request)
            except OpenAIError as e:
                if not is_transient(e):
                    raise LLMError(f"API error: {e}", cause=e, retryable=False) from e
                if attempt >= self._max_retries:
                    raise LLMError(
                        f"{type(e).__name__} after {self._max_retries} retries",
                        cause=e,
                        retryable=True,
                    ) from e

                delay = self._backoff(attempt)
                logger.warning(
                    "Oracle request failed (%s), retry %d/%d in %.1fs",
                    type(e).__name__,
                    attempt + 1,
                    self._max_retries,
                    delay,
                )
                await asyncio.sleep(delay)
                attempt += 1
            except Exception as e:
                raise LLMError(f"Unexpected error: {e}", cause=e, retryable=False) from e

    def _backoff(self, attempt: int) -> float:
        """Delay before retry number `attempt + 1`."""
        return min(self.BACKOFF_BASE * 2**attempt, self.BACKOFF_CAP)

    async def health_check(self) -> bool:
        """Send a minimal request; False on any API or network failure."""
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": "ping"}],
                max_tokens=5,
            )
        except OpenAIError as e:
            logger.warning("Oracle health check failed: %s", e)
            return False
        return bool(response.choices)
