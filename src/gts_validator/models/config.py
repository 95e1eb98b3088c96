"""Core validation options, independent of where source text comes from."""

from __future__ import annotations

import string
from enum import StrEnum
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gts_validator.models.errors import InvalidConfigError

DEFAULT_MAX_LENGTH = 256

# Characters that may appear inside a segment, so they cannot act as separators.
_SEGMENT_CHARS = frozenset(string.ascii_letters + string.digits + "_-.")


class CasePolicy(StrEnum):
    CASE_INSENSITIVE_SCHEME = "case-insensitive-scheme"
    CASE_INSENSITIVE_SCHEME_VENDOR = "case-insensitive-scheme-vendor"
    CASE_SENSITIVE = "case-sensitive"

    @property
    def folds_scheme(self) -> bool:
        return self is not CasePolicy.CASE_SENSITIVE

    @property
    def folds_vendor(self) -> bool:
        return self is CasePolicy.CASE_INSENSITIVE_SCHEME_VENDOR


class DiscoveryMode(StrEnum):
    """How Markdown prose is searched for identifier candidates.

    ``strict`` only picks up prose text shaped like a complete identifier;
    ``heuristic`` picks up every run containing the separator, which reports
    more malformed references at the cost of false positives.
    """

    STRICT = "strict"
    HEURISTIC = "heuristic"


class ValidationConfig(BaseModel):
    """Policy and grammar options for a validation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    vendor: str | None = None
    allowed_vendors: frozenset[str] = frozenset()
    reserved_names: frozenset[str] = frozenset()
    max_length: int = Field(DEFAULT_MAX_LENGTH, gt=0)
    case_policy: CasePolicy = CasePolicy.CASE_INSENSITIVE_SCHEME

    scheme: str = "gts"
    separator: str = ":"
    path_separator: str = "/"
    version_separator: str = "@"
    require_scheme: bool = False

    discovery_mode: DiscoveryMode = DiscoveryMode.STRICT
    scan_keys: bool = False
    skip_tokens: tuple[str, ...] = ()

    @classmethod
    def create(cls, **options: Any) -> ValidationConfig:
        """Build a config, reporting bad options as ``InvalidConfigError``."""
        try:
            return cls(**options)
        except pydantic.ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidConfigError(f"Invalid validation config: {problems}") from exc

    @field_validator("vendor")
    @classmethod
    def _vendor_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("vendor must not be empty")
        return value

    @field_validator("scheme")
    @classmethod
    def _scheme_is_segment(cls, value: str) -> str:
        if not value or not set(value) <= _SEGMENT_CHARS:
            raise ValueError("scheme must be a non-empty run of letters, digits, '_' or '-'")
        return value

    @field_validator("separator", "path_separator", "version_separator")
    @classmethod
    def _single_punctuation(cls, value: str) -> str:
        if len(value) != 1 or value.isspace() or value in _SEGMENT_CHARS:
            raise ValueError("separators must be a single punctuation character")
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> ValidationConfig:
        separators = {self.separator, self.path_separator, self.version_separator}
        if len(separators) != 3:
            raise ValueError("separator, path_separator and version_separator must differ")
        if self.vendor is not None and self.allowed_vendors:
            raise ValueError("vendor and allowed_vendors are mutually exclusive")
        return self

    @property
    def canonical_scheme(self) -> str:
        """The scheme as it reads after normalization under this case policy."""
        return self.scheme.lower() if self.case_policy.folds_scheme else self.scheme

    @property
    def legal_characters(self) -> frozenset[str]:
        return _SEGMENT_CHARS | {self.separator, self.path_separator, self.version_separator}
