"""Pure renderers for a built ``ValidationReport``."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from gts_validator.models.report import ValidationReport

_RED = "\x1b[31m"
_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"


def report_to_dict(report: ValidationReport) -> dict[str, Any]:
    return {
        "files_scanned": report.files_scanned,
        "ok": report.ok,
        "errors_count": report.errors_count,
        "incomplete": report.incomplete,
        "files": [
            {
                "file": result.file,
                "format": str(result.source_format),
                "ok_count": result.ok_count,
                "errors": [
                    {
                        "kind": str(error.kind),
                        "message": error.message,
                        "line": error.span.line,
                        "column": error.span.column,
                        "raw_value": error.raw_value,
                        "json_path": error.json_path,
                    }
                    for error in result.errors
                ],
            }
            for result in report.files
        ],
    }


def render_json(report: ValidationReport) -> str:
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ReportSummary:
    """Counts and error positions recovered from a rendered JSON report."""

    files_scanned: int
    ok: int
    errors_count: int
    incomplete: bool
    errors: list[tuple[str, str, str, int, int]]


def report_summary_from_json(text: str) -> ReportSummary:
    """Parse ``render_json`` output back into counts and ``(file, kind, message, line, column)`` rows."""
    data = json.loads(text)
    return ReportSummary(
        files_scanned=data["files_scanned"],
        ok=data["ok"],
        errors_count=data["errors_count"],
        incomplete=data.get("incomplete", False),
        errors=[
            (entry["file"], err["kind"], err["message"], err["line"], err["column"])
            for entry in data["files"]
            for err in entry["errors"]
        ],
    )


def summary_line(report: ValidationReport) -> str:
    line = f"{report.files_scanned} files scanned, {report.ok} ok, {report.errors_count} errors"
    if report.incomplete:
        line += " (incomplete)"
    return line


def render_human(report: ValidationReport, *, color: bool = False) -> str:
    """One line per error followed by the summary line; ANSI codes only when *color*."""
    lines: list[str] = []
    for error in report.errors:
        text = error.format_human_readable()
        lines.append(f"{_RED}{text}{_RESET}" if color else text)
    summary = summary_line(report)
    lines.append(f"{_BOLD}{summary}{_RESET}" if color else summary)
    return "\n".join(lines) + "\n"
