"""Pydantic domain models for the GTS identifier validator."""

from gts_validator.models.config import CasePolicy, DiscoveryMode, ValidationConfig
from gts_validator.models.errors import (
    ErrorKind,
    InvalidConfigError,
    LimitExceededError,
    PathNotFoundError,
    RunError,
    SourceReadError,
    SourceSpan,
    ValidationError,
)
from gts_validator.models.identifier import (
    GtsIdentifier,
    NormalizedIdentifier,
    RawToken,
    SourceFormat,
)
from gts_validator.models.report import FileResult, ValidationReport

__all__ = [
    "CasePolicy",
    "DiscoveryMode",
    "ErrorKind",
    "FileResult",
    "GtsIdentifier",
    "InvalidConfigError",
    "LimitExceededError",
    "NormalizedIdentifier",
    "PathNotFoundError",
    "RawToken",
    "RunError",
    "SourceFormat",
    "SourceReadError",
    "SourceSpan",
    "ValidationConfig",
    "ValidationError",
    "ValidationReport",
]
