"""Folds per-file results into a single validation report."""

from __future__ import annotations

from collections.abc import Iterable

from gts_validator.models.report import FileResult, ValidationReport


class ReportAggregator:
    """Accumulates file results in arrival order; performs no validation itself."""

    def __init__(self) -> None:
        self._files: list[FileResult] = []
        self._ok = 0
        self._errors = 0

    def add(self, result: FileResult) -> None:
        self._files.append(result)
        self._ok += result.ok_count
        self._errors += result.errors_count

    @property
    def files_scanned(self) -> int:
        return len(self._files)

    def build(self, *, incomplete: bool = False) -> ValidationReport:
        return ValidationReport(
            files_scanned=len(self._files),
            ok=self._ok,
            errors_count=self._errors,
            files=tuple(self._files),
            incomplete=incomplete,
        )


def aggregate(results: Iterable[FileResult], *, incomplete: bool = False) -> ValidationReport:
    aggregator = ReportAggregator()
    for result in results:
        aggregator.add(result)
    return aggregator.build(incomplete=incomplete)
