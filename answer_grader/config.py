"""
Configuration management for the Answer Grader.

Uses Pydantic Settings for type-safe configuration loading from environment variables.
The grading orchestrator itself never reads the environment: it receives an
explicit GraderConfig built from these settings (or constructed directly in tests).
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PASS_CONFIDENCE = 0.9
DEFAULT_REVIEW_CONFIDENCE = 0.7


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The oracle API key is optional: without it the grader runs
    deterministically and algebra falls back to normalized comparison.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Oracle API Configuration
    # ==========================================================================
    openai_api_key: str | None = Field(
        default=None,
        description="API key for the OpenAI-compatible equivalence oracle endpoint",
    )

    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL for the oracle API",
    )

    oracle_model: str = Field(
        default="gpt-4o-mini",
        description="Model used to judge algebraic equivalence",
    )

    oracle_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Temperature for oracle generation (0.0 = deterministic)",
    )

    oracle_max_tokens: int = Field(
        default=50,
        ge=1,
        le=4096,
        description="Maximum tokens in an oracle reply",
    )

    oracle_max_retries: int = Field(
        default=2,
        ge=0,
        le=5,
        description="Retries the oracle client performs on transient API errors",
    )

    oracle_llm_confidence: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Confidence reported for verdicts decided by the LLM",
    )

    # ==========================================================================
    # Grading Configuration
    # ==========================================================================
    use_oracle: bool = Field(
        default=True,
        description="Consult the equivalence oracle for algebraic answers",
    )

    pass_confidence_threshold: float = Field(
        default=DEFAULT_PASS_CONFIDENCE,
        ge=0.0,
        le=1.0,
        description="Minimum oracle confidence for an automatic PASS",
    )

    review_confidence_threshold: float = Field(
        default=DEFAULT_REVIEW_CONFIDENCE,
        ge=0.0,
        le=1.0,
        description="Minimum oracle confidence for a REVIEW instead of FAIL",
    )

    # ==========================================================================
    # Extraction Boundary Configuration
    # ==========================================================================
    vision_conf_threshold: float = Field(
        default=0.98,
        ge=0.0,
        le=1.0,
        description="Minimum extraction confidence before an answer is graded",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level for the CLI",
    )

    @field_validator("openai_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URL doesn't have trailing slash."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def oracle_available(self) -> bool:
        """Whether an API key is configured for the oracle."""
        return bool(self.openai_api_key)


class GraderConfig(BaseModel):
    """
    Explicit grading configuration passed to the orchestrator.

    Thresholds gate the oracle's verdict: at or above `pass_confidence_threshold`
    a match passes, at or above `review_confidence_threshold` it goes to review.
    """

    model_config = ConfigDict(frozen=True)

    use_oracle: bool = True
    pass_confidence_threshold: float = Field(default=DEFAULT_PASS_CONFIDENCE, ge=0.0, le=1.0)
    review_confidence_threshold: float = Field(default=DEFAULT_REVIEW_CONFIDENCE, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "GraderConfig":
        """Review threshold can't exceed the pass threshold."""
        if self.review_confidence_threshold > self.pass_confidence_threshold:
            raise ValueError(
                f"review_confidence_threshold ({self.review_confidence_threshold}) cannot "
                f"exceed pass_confidence_threshold ({self.pass_confidence_threshold})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "GraderConfig":
        return cls(
            use_oracle=settings.use_oracle,
            pass_confidence_threshold=settings.pass_confidence_threshold,
            review_confidence_threshold=settings.review_confidence_threshold,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
