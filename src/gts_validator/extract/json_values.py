"""JSON scanner: string values at any depth, located by line and column.

``json.loads`` discards positions and rejects malformed documents, so this is a
small tolerant lexer that only tracks enough container state to tell keys
from values and to build a JSON path for each string.
"""

from __future__ import annotations

import json
from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass

from gts_validator.extract.candidates import looks_like_identifier
from gts_validator.models.config import ValidationConfig
from gts_validator.models.identifier import RawToken, SourceFormat


@dataclass
class _Frame:
    is_object: bool
    key: str | None = None
    index: int = 0
    expect_key: bool = True


class LineIndex:
    """Maps character offsets to 1-based line/column pairs."""

    def __init__(self, content: str) -> None:
        self._starts = [0]
        self._starts.extend(i + 1 for i, ch in enumerate(content) if ch == "\n")

    def position(self, offset: int) -> tuple[int, int]:
        line = bisect_right(self._starts, offset)
        return line, offset - self._starts[line - 1] + 1


def _json_path(stack: list[_Frame]) -> str:
    path = "$"
    for frame in stack:
        if frame.is_object:
            path += f".{frame.key}" if frame.key is not None else ""
        else:
            path += f"[{frame.index}]"
    return path


def _read_string(content: str, start: int) -> tuple[str, int]:
    """Read the literal opening at *start*; return ``(decoded, end_offset)``."""
    pos = start + 1
    while pos < len(content):
        ch = content[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == '"' or ch == "\n":
            break
        pos += 1
    literal = content[start + 1 : pos]
    try:
        decoded = json.loads(f'"{literal}"')
    except ValueError:
        decoded = literal
    end = pos + 1 if pos < len(content) and content[pos] == '"' else pos
    return decoded, end


def scan_json(content: str, file: str, config: ValidationConfig) -> Iterator[RawToken]:
    lines = LineIndex(content)
    stack: list[_Frame] = []
    pos = 0

    def _token(text: str, offset: int, json_path: str) -> RawToken:
        line, column = lines.position(offset)
        return RawToken(
            text=text,
            file=file,
            line=line,
            column=column,
            source_format=SourceFormat.JSON,
            json_path=json_path,
        )

    while pos < len(content):
        ch = content[pos]
        if ch == '"':
            text, end = _read_string(content, pos)
            frame = stack[-1] if stack else None
            if frame is not None and frame.is_object and frame.expect_key:
                frame.key = text
                frame.expect_key = False
                if config.scan_keys and looks_like_identifier(text, config, whole_value=True):
                    yield _token(text, pos + 1, _json_path(stack))
            elif looks_like_identifier(text, config, whole_value=True):
                yield _token(text, pos + 1, _json_path(stack))
            pos = end
            continue

        if ch == "{":
            stack.append(_Frame(is_object=True))
        elif ch == "[":
            stack.append(_Frame(is_object=False))
        elif ch in "}]":
            if stack:
                stack.pop()
        elif ch == "," and stack:
            frame = stack[-1]
            if frame.is_object:
                frame.key = None
                frame.expect_key = True
            else:
                frame.index += 1
        elif ch == ":" and stack and stack[-1].is_object:
            stack[-1].expect_key = False
        pos += 1
