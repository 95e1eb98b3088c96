"""Format-aware extraction of identifier candidates from text."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from gts_validator.extract.json_values import scan_json
from gts_validator.extract.markdown import scan_markdown
from gts_validator.extract.yaml_values import scan_yaml
from gts_validator.models.config import ValidationConfig
from gts_validator.models.identifier import RawToken, SourceFormat

Scanner = Callable[[str, str, ValidationConfig], Iterator[RawToken]]

SCANNERS: dict[SourceFormat, Scanner] = {
    SourceFormat.MARKDOWN: scan_markdown,
    SourceFormat.JSON: scan_json,
    SourceFormat.YAML: scan_yaml,
}


class TokenStream:
    """Lazy, restartable sequence of tokens: every iteration re-scans the content."""

    def __init__(
        self, content: str, source_format: SourceFormat, file: str, config: ValidationConfig
    ) -> None:
        self.content = content
        self.source_format = SourceFormat(source_format)
        self.file = file
        self.config = config

    def __iter__(self) -> Iterator[RawToken]:
        return SCANNERS[self.source_format](self.content, self.file, self.config)


def extract_tokens(
    content: str,
    source_format: SourceFormat,
    file: str,
    config: ValidationConfig | None = None,
) -> TokenStream:
    return TokenStream(content, source_format, file, config or ValidationConfig())


__all__ = ["SCANNERS", "TokenStream", "extract_tokens"]
