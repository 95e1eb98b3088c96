"""Lexical shape checks shared by the format-specific scanners.

Discovery is intentionally broader than the grammar: anything that looks like
an identifier is emitted so the grammar validator can report it, rather than
being dropped here.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from functools import lru_cache

from gts_validator.models.config import ValidationConfig

# A run of characters that can belong to one token in free text.
_RUN_RE = re.compile(r"[^\s`'\"<>()\[\]{},;|*]+")

_TRAILING_PUNCTUATION = ".,;:!?"


@lru_cache(maxsize=32)
def _well_formed_re(scheme: str, sep: str, psep: str, vsep: str) -> re.Pattern[str]:
    seg = r"[A-Za-z0-9_.-]+"
    return re.compile(
        rf"(?:(?i:{re.escape(scheme)}){re.escape(sep)}(?://)?)?"
        rf"{seg}{re.escape(sep)}{seg}(?:{re.escape(psep)}{seg})+"
        rf"(?:{re.escape(vsep)}{seg})?"
    )


def looks_like_identifier(
    text: str, config: ValidationConfig, *, strict: bool = False, whole_value: bool = False
) -> bool:
    """Whether *text* is identifier-shaped enough to be emitted as a token.

    *whole_value* marks text that is a complete JSON/YAML scalar or code span
    rather than a run cut out of prose. Such text is emitted even when it
    starts with a character no segment may start with, provided it also
    carries a path separator, so that values like ``1acme:pkg/core`` are
    reported instead of dropped.
    """
    text = text.strip().strip("`'\"")
    if config.separator not in text or any(ch.isspace() for ch in text):
        return False
    prefix, _, rest = text.partition(config.separator)
    if rest.startswith("//") and prefix.lower() != config.scheme.lower():
        # a URL such as https://example.com
        return False
    first = text[0]
    if not (first.isalpha() or first == "_"):
        # times such as 12:30 stay out
        if not (whole_value and config.path_separator in rest):
            return False
    if strict:
        pattern = _well_formed_re(
            config.scheme, config.separator, config.path_separator, config.version_separator
        )
        return pattern.fullmatch(text) is not None
    return True


def scan_runs(
    text: str, config: ValidationConfig, *, strict: bool
) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, candidate)`` for identifier-shaped runs in free text."""
    for match in _RUN_RE.finditer(text):
        candidate = match.group().rstrip(_TRAILING_PUNCTUATION)
        if candidate and looks_like_identifier(candidate, config, strict=strict):
            yield match.start(), candidate
