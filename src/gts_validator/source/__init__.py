"""Source strategies: where the text handed to the validation engine comes from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from gts_validator.models.identifier import SourceFormat

EXTENSION_FORMATS: dict[str, SourceFormat] = {
    ".md": SourceFormat.MARKDOWN,
    ".json": SourceFormat.JSON,
    ".yaml": SourceFormat.YAML,
    ".yml": SourceFormat.YAML,
}


@dataclass(frozen=True)
class SourceDocument:
    """One unit of text to validate, tagged with its identity and format."""

    file: str
    source_format: SourceFormat
    content: str


def format_for_path(path: PurePath | str) -> SourceFormat | None:
    """Infer the source format from the file extension; ``None`` means skip the file."""
    return EXTENSION_FORMATS.get(PurePath(path).suffix.lower())


__all__ = ["EXTENSION_FORMATS", "SourceDocument", "format_for_path"]
