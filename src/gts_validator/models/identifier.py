"""Token and identifier types flowing through the validation pipeline."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from gts_validator.models.errors import SourceSpan


class SourceFormat(StrEnum):
    MARKDOWN = "markdown"
    JSON = "json"
    YAML = "yaml"


class RawToken(BaseModel):
    """An identifier-shaped substring as it appeared in the source text."""

    model_config = ConfigDict(frozen=True)

    text: str
    file: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    source_format: SourceFormat
    json_path: str | None = None

    @property
    def span(self) -> SourceSpan:
        return SourceSpan(file=self.file, line=self.line, column=self.column)


class NormalizedIdentifier(BaseModel):
    """Canonical text of a token, keeping a back-reference to where it came from."""

    model_config = ConfigDict(frozen=True)

    canonical_text: str
    origin: RawToken


class GtsIdentifier(BaseModel):
    """A structurally valid identifier that passed every policy check."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    vendor: str
    namespace: tuple[str, ...]
    name: str
    version: str | None = None
    span: SourceSpan

    def render(
        self, separator: str = ":", path_separator: str = "/", version_separator: str = "@"
    ) -> str:
        path = path_separator.join((*self.namespace, self.name))
        text = f"{self.scheme}{separator}{self.vendor}{separator}{path}"
        if self.version is not None:
            text += f"{version_separator}{self.version}"
        return text

    def __str__(self) -> str:
        return self.render()
