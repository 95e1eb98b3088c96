"""Shared test fixtures for the GTS identifier validator."""

from __future__ import annotations

from pathlib import Path

import pytest

from gts_validator.grammar import GrammarValidator
from gts_validator.models.config import ValidationConfig
from gts_validator.models.identifier import RawToken, SourceFormat
from gts_validator.normalize import Normalizer

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_REPO_DIR = FIXTURES_DIR / "sample_repo"


@pytest.fixture
def config() -> ValidationConfig:
    return ValidationConfig()


@pytest.fixture
def normalizer(config: ValidationConfig) -> Normalizer:
    return Normalizer(config)


@pytest.fixture
def grammar(config: ValidationConfig) -> GrammarValidator:
    return GrammarValidator(config)


@pytest.fixture
def make_token():
    """Build a Markdown ``RawToken`` at line 1, column 1 unless told otherwise."""

    def _make(text: str, *, line: int = 1, column: int = 1, json_path: str | None = None) -> RawToken:
        return RawToken(
            text=text,
            file="docs/readme.md",
            line=line,
            column=column,
            source_format=SourceFormat.MARKDOWN,
            json_path=json_path,
        )

    return _make


@pytest.fixture
def sample_repo() -> Path:
    return SAMPLE_REPO_DIR
