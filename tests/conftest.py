"""
Pytest configuration and fixtures.

Provides common test fixtures for all test modules.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from answer_grader.config import Settings
from answer_grader.models import (
    AlgebraicCanonical,
    MultipleChoiceCanonical,
    NumericCanonical,
    OracleVerdict,
    ShortTextCanonical,
)


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# Canonical Answer Fixtures
# ==============================================================================


@pytest.fixture
def numeric_canonical() -> NumericCanonical:
    """Gravitational acceleration with automatic tolerance."""
    return NumericCanonical(value="9.81")


@pytest.fixture
def numeric_canonical_with_units() -> NumericCanonical:
    """Gravitational acceleration that requires units."""
    return NumericCanonical(value="9.81", units="m/s^2")


@pytest.fixture
def choice_canonical() -> MultipleChoiceCanonical:
    return MultipleChoiceCanonical(letter="B")


@pytest.fixture
def short_canonical() -> ShortTextCanonical:
    """Short-text answer with synonyms."""
    return ShortTextCanonical(text="Photosynthesis", synonyms=("photo synthesis", "Light reaction"))


@pytest.fixture
def algebra_canonical() -> AlgebraicCanonical:
    """Perfect-square expansion with an accepted factored form."""
    return AlgebraicCanonical(expression="x^2 + 4x + 4", synonyms=("(x+2)^2",))


# ==============================================================================
# Oracle Fixtures
# ==============================================================================


@pytest.fixture
def confident_match() -> OracleVerdict:
    return OracleVerdict(match=True, confidence=0.95, reason="LLM: both expand to x^2+4x+4")


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with mocked values."""
    return Settings(
        openai_api_key="test-api-key-for-testing",
        openai_base_url="https://test.api.local/",
        oracle_model="test-model",
        oracle_max_retries=2,
        use_oracle=True,
        pass_confidence_threshold=0.9,
        review_confidence_threshold=0.7,
    )


@pytest.fixture
def offline_settings() -> Settings:
    """Settings without an oracle API key."""
    return Settings(openai_api_key=None, use_oracle=True)
