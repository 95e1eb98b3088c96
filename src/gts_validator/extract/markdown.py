"""Markdown scanner: code spans, fenced blocks and prose, line by line."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from gts_validator.extract.candidates import looks_like_identifier, scan_runs
from gts_validator.models.config import DiscoveryMode, ValidationConfig
from gts_validator.models.identifier import RawToken, SourceFormat

# Fenced blocks in these languages hold grammar definitions, not references.
SKIP_FENCE_LANGUAGES = frozenset({"ebnf", "bnf", "abnf", "regex", "grammar"})

# Text before a candidate on the same line that marks it as a deliberate counter-example.
BAD_EXAMPLE_MARKERS = ("❌", "✗", "invalid", "incorrect", "wrong", "bad example")

_CODE_SPAN_RE = re.compile(r"(`+)(.+?)(?<!`)\1(?!`)")


@dataclass
class _Fence:
    char: str
    length: int
    skip: bool


def _parse_fence(stripped: str) -> tuple[str, int] | None:
    if not stripped or stripped[0] not in "`~":
        return None
    char = stripped[0]
    length = len(stripped) - len(stripped.lstrip(char))
    return (char, length) if length >= 3 else None


def _is_suppressed(prefix: str, config: ValidationConfig) -> bool:
    lowered = prefix.lower()
    if any(marker in lowered for marker in BAD_EXAMPLE_MARKERS):
        return True
    return any(token.lower() in lowered for token in config.skip_tokens)


def _code_span_candidates(
    body: str, body_start: int, config: ValidationConfig
) -> Iterator[tuple[int, str]]:
    """A span without whitespace is one candidate, punctuation and all."""
    stripped = body.strip()
    if not stripped:
        return
    if any(ch.isspace() for ch in stripped):
        # a code snippet; pick identifier-shaped runs out of it
        for off, text in scan_runs(body, config, strict=False):
            yield body_start + off, text
        return
    if looks_like_identifier(stripped, config, whole_value=True):
        yield body_start + len(body) - len(body.lstrip()), stripped


def _line_candidates(
    line: str, config: ValidationConfig, *, in_fence: bool
) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, text)`` candidates of one line in left-to-right order."""
    strict = config.discovery_mode is DiscoveryMode.STRICT
    if in_fence:
        yield from scan_runs(line, config, strict=strict)
        return

    found: list[tuple[int, str]] = []
    cursor = 0
    for span in _CODE_SPAN_RE.finditer(line):
        prose = line[cursor : span.start()]
        found.extend((cursor + off, text) for off, text in scan_runs(prose, config, strict=strict))
        found.extend(_code_span_candidates(span.group(2), span.start(2), config))
        cursor = span.end()
    tail = line[cursor:]
    found.extend((cursor + off, text) for off, text in scan_runs(tail, config, strict=strict))
    yield from found


def scan_markdown(content: str, file: str, config: ValidationConfig) -> Iterator[RawToken]:
    fence: _Fence | None = None

    for index, raw_line in enumerate(content.split("\n")):
        line_number = index + 1
        line = raw_line.removesuffix("\r")

        parsed = _parse_fence(line.lstrip())
        if parsed is not None:
            char, length = parsed
            if fence is None:
                language = line.lstrip()[length:].strip().lower()
                fence = _Fence(char=char, length=length, skip=language in SKIP_FENCE_LANGUAGES)
                continue
            if char == fence.char and length >= fence.length:
                fence = None
                continue

        if fence is not None and fence.skip:
            continue

        seen: set[str] = set()
        for offset, text in _line_candidates(line, config, in_fence=fence is not None):
            if text in seen or _is_suppressed(line[:offset], config):
                continue
            seen.add(text)
            yield RawToken(
                text=text,
                file=file,
                line=line_number,
                column=offset + 1,
                source_format=SourceFormat.MARKDOWN,
            )
