"""Exceptions raised by the equivalence oracle and its LLM client."""


class OracleError(Exception):
    """Raised when the equivalence oracle cannot produce a verdict."""


class LLMError(OracleError):
    """Raised when an LLM API call fails."""

    def __init__(self, message: str, cause: Exception | None = None, retryable: bool = False):
        self.cause = cause
        self.retryable = retryable
        super().__init__(message)


class OracleResponseError(OracleError):
    """Raised when an oracle reply can't be interpreted."""

    def __init__(self, message: str, raw_response: str | None = None):
        self.raw_response = raw_response
        super().__init__(message)
