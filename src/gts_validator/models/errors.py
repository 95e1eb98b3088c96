"""Structured validation errors and run-level failures."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SourceSpan(BaseModel):
    """Points to the exact location of a token in its source file."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)


class ErrorKind(StrEnum):
    MALFORMED_GRAMMAR = "MalformedGrammar"
    VENDOR_MISMATCH = "VendorMismatch"
    RESERVED_NAME = "ReservedName"
    LENGTH_EXCEEDED = "LengthExceeded"
    EMPTY_SEGMENT = "EmptySegment"
    INVALID_CHARACTER = "InvalidCharacter"


class ValidationError(BaseModel):
    """A GTS identifier that was found and rejected.

    Exactly one is produced per failed token; it is report data, never raised.
    """

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    span: SourceSpan
    raw_value: str
    normalized_id: str = ""
    json_path: str | None = None

    def format_human_readable(self) -> str:
        return (
            f"{self.span.file}:{self.span.line}:{self.span.column}: "
            f"{self.kind} — {self.message}"
        )


# ---------------------------------------------------------------------------
# Run-level failures
# ---------------------------------------------------------------------------


class RunError(Exception):
    """Base class for failures that abort a validation run."""


class InvalidConfigError(RunError):
    """Raised when validation or source options are unusable."""


class PathNotFoundError(RunError):
    """Raised when a configured scan root does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path does not exist: {path}")


class SourceReadError(RunError):
    """Raised when a discovered file cannot be read as text."""

    def __init__(self, file: str, kind: str, message: str) -> None:
        self.file = file
        self.kind = kind
        super().__init__(f"{file}: {message}")


class LimitExceededError(RunError):
    """Raised when a scan would exceed a configured resource limit."""

    def __init__(self, name: str, limit: int) -> None:
        self.name = name
        self.limit = limit
        super().__init__(f"Scan aborted: {name} limit ({limit:,}) reached")
