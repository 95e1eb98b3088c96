"""YAML scanner built on the ruamel.yaml event stream.

Parser events carry the source mark of every scalar, so positions are exact
and comments never reach the scanner.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError, YAMLError
from ruamel.yaml.events import (
    AliasEvent,
    CollectionEndEvent,
    MappingStartEvent,
    NodeEvent,
    ScalarEvent,
    SequenceStartEvent,
)

from gts_validator.extract.candidates import looks_like_identifier, scan_runs
from gts_validator.models.config import ValidationConfig
from gts_validator.models.identifier import RawToken, SourceFormat

logger = logging.getLogger("gts_validator.extract.yaml")

_QUOTED_STYLES = ("'", '"')
_COMMENT_RE = re.compile(r"(?:^|\s)#.*$")


@dataclass
class _Frame:
    is_mapping: bool
    key: str | None = None
    expect_key: bool = True
    current: int = 0
    count: int = 0


def _json_path(stack: list[_Frame]) -> str:
    path = "$"
    for frame in stack:
        if frame.is_mapping:
            path += f".{frame.key}" if frame.key is not None else ""
        else:
            path += f"[{frame.current}]"
    return path


def _enter_node(stack: list[_Frame], event: NodeEvent) -> bool:
    """Record a node in its parent container; return True if it is a mapping key."""
    if not stack:
        return False
    parent = stack[-1]
    if not parent.is_mapping:
        parent.current = parent.count
        parent.count += 1
        return False
    if parent.expect_key:
        parent.expect_key = False
        parent.key = event.value if isinstance(event, ScalarEvent) else "?"
        return True
    parent.expect_key = True
    return False


def _scan_remaining_lines(
    lines: list[str], start: int, file: str, config: ValidationConfig
) -> Iterator[RawToken]:
    for index in range(start, len(lines)):
        line = _COMMENT_RE.sub("", lines[index].removesuffix("\r"))
        for offset, text in scan_runs(line, config, strict=False):
            yield RawToken(
                text=text,
                file=file,
                line=index + 1,
                column=offset + 1,
                source_format=SourceFormat.YAML,
            )


def scan_yaml(content: str, file: str, config: ValidationConfig) -> Iterator[RawToken]:
    stack: list[_Frame] = []
    last_line = -1

    try:
        for event in YAML().parse(content):
            if isinstance(event, CollectionEndEvent):
                if stack:
                    stack.pop()
                continue
            if not isinstance(event, NodeEvent):
                continue

            is_key = _enter_node(stack, event)
            if isinstance(event, (MappingStartEvent, SequenceStartEvent)):
                stack.append(_Frame(is_mapping=isinstance(event, MappingStartEvent)))
                continue
            if isinstance(event, AliasEvent) or not isinstance(event, ScalarEvent):
                continue

            last_line = event.start_mark.line
            if event.style not in (None, *_QUOTED_STYLES):
                continue
            if is_key and not config.scan_keys:
                continue
            if not looks_like_identifier(event.value, config, whole_value=True):
                continue
            column = event.start_mark.column + 1
            if event.style in _QUOTED_STYLES:
                column += 1
            yield RawToken(
                text=event.value,
                file=file,
                line=event.start_mark.line + 1,
                column=column,
                source_format=SourceFormat.YAML,
                json_path=_json_path(stack),
            )
    except YAMLError as exc:
        mark = exc.problem_mark if isinstance(exc, MarkedYAMLError) else None
        logger.warning(
            "%s: YAML parse error%s; scanning remaining lines as text",
            file,
            f" at line {mark.line + 1}" if mark is not None else "",
        )
        yield from _scan_remaining_lines(content.split("\n"), last_line + 1, file, config)
