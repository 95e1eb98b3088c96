"""Per-file results and the run-level validation report."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from gts_validator.models.errors import ValidationError
from gts_validator.models.identifier import GtsIdentifier, SourceFormat


class FileResult(BaseModel):
    """Outcome of validating every token extracted from one file."""

    model_config = ConfigDict(frozen=True)

    file: str
    source_format: SourceFormat
    ok: tuple[GtsIdentifier, ...] = ()
    errors: tuple[ValidationError, ...] = ()

    @property
    def ok_count(self) -> int:
        return len(self.ok)

    @property
    def errors_count(self) -> int:
        return len(self.errors)

    @property
    def token_count(self) -> int:
        return self.ok_count + self.errors_count


class ValidationReport(BaseModel):
    """Terminal aggregate of a validation run.

    ``files`` keeps scan order so reports of identical inputs diff cleanly.
    ``incomplete`` is set when a run deadline stopped the scan early.
    """

    model_config = ConfigDict(frozen=True)

    files_scanned: int = 0
    ok: int = 0
    errors_count: int = 0
    files: tuple[FileResult, ...] = ()
    incomplete: bool = False

    @property
    def passed(self) -> bool:
        return self.errors_count == 0 and not self.incomplete

    @property
    def errors(self) -> list[ValidationError]:
        return [error for result in self.files for error in result.errors]
