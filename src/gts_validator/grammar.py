"""GTS identifier grammar and policy checks.

    identifier     := [ scheme SEP ] vendor SEP namespace-path PSEP name [ VSEP version ]
    namespace-path := segment ( PSEP segment )*
    segment        := [A-Za-z_] [A-Za-z0-9_-]*
    version        := digits ( "." digits )*

Rules run in a fixed order and the first failing rule decides the error kind.
Cheap lexical checks come first, structure next, configurable policy last.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from gts_validator.models.config import ValidationConfig
from gts_validator.models.errors import ErrorKind, ValidationError
from gts_validator.models.identifier import GtsIdentifier, NormalizedIdentifier

_SEGMENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")


@dataclass
class _Parts:
    scheme: str
    explicit_scheme: bool
    vendor: str
    namespace: list[str]
    name: str
    version: str | None


@dataclass
class _Candidate:
    text: str
    parts: _Parts | None = field(default=None)


Rule = Callable[["GrammarValidator", _Candidate], "str | None"]


class GrammarValidator:
    """Turns a normalized identifier into a ``GtsIdentifier`` or exactly one error."""

    def __init__(self, config: ValidationConfig | None = None) -> None:
        self.config = config or ValidationConfig()

    def validate(self, identifier: NormalizedIdentifier) -> GtsIdentifier | ValidationError:
        candidate = _Candidate(text=identifier.canonical_text)
        origin = identifier.origin
        for kind, rule in RULES:
            message = rule(self, candidate)
            if message is not None:
                return ValidationError(
                    kind=kind,
                    message=message,
                    span=origin.span,
                    raw_value=origin.text,
                    normalized_id=candidate.text,
                    json_path=origin.json_path,
                )
        parts = candidate.parts
        assert parts is not None
        return GtsIdentifier(
            scheme=parts.scheme,
            vendor=parts.vendor,
            namespace=tuple(parts.namespace),
            name=parts.name,
            version=parts.version,
            span=origin.span,
        )

    # -- rules ---------------------------------------------------------------

    def _check_charset(self, candidate: _Candidate) -> str | None:
        legal = self.config.legal_characters
        for position, char in enumerate(candidate.text, start=1):
            if char not in legal:
                return f"Invalid character {char!r} at position {position}"
        return None

    def _check_structure(self, candidate: _Candidate) -> str | None:
        cfg = self.config
        text = candidate.text
        if not text:
            return None
        if text.count(cfg.version_separator) > 1:
            return f"More than one '{cfg.version_separator}' version separator"

        body, has_version, version = text.partition(cfg.version_separator)
        parts = body.split(cfg.separator)
        if len(parts) == 3:
            scheme, vendor, path = parts
            explicit = True
        elif len(parts) == 2:
            if cfg.require_scheme:
                return f"Missing '{cfg.scheme}{cfg.separator}' scheme prefix"
            scheme, explicit = cfg.canonical_scheme, False
            vendor, path = parts
        else:
            return (
                f"Expected [scheme{cfg.separator}]vendor{cfg.separator}"
                f"namespace{cfg.path_separator}name, found {len(parts)} "
                f"'{cfg.separator}'-separated part(s)"
            )

        # An empty part (a::b) is left for the empty-segment rule to name.
        has_empty_part = not all(parts)
        if explicit and not has_empty_part and scheme != cfg.canonical_scheme:
            return f"Unknown scheme '{scheme}', expected '{cfg.canonical_scheme}'"

        segments = path.split(cfg.path_separator)
        if len(segments) < 2 and not has_empty_part:
            return f"Missing namespace: expected namespace{cfg.path_separator}name after vendor"
        namespace, name = segments[:-1], segments[-1]

        labelled = [("vendor", vendor), *(("namespace segment", s) for s in namespace), ("name", name)]
        for label, segment in labelled:
            if segment and not _SEGMENT_RE.fullmatch(segment):
                return (
                    f"{label.capitalize()} '{segment}' must start with a letter or '_' "
                    "and contain only letters, digits, '_' or '-'"
                )
        if version and not all(piece.isdigit() for piece in version.split(".") if piece):
            return f"Version '{version}' must be dot-separated numbers"

        candidate.parts = _Parts(
            scheme=scheme,
            explicit_scheme=explicit,
            vendor=vendor,
            namespace=namespace,
            name=name,
            version=version if has_version else None,
        )
        return None

    def _check_empty(self, candidate: _Candidate) -> str | None:
        parts = candidate.parts
        if not candidate.text or parts is None:
            return "Identifier is empty"
        if parts.explicit_scheme and not parts.scheme:
            return "Empty scheme segment"
        if not parts.vendor:
            return "Empty vendor segment"
        if any(not segment for segment in parts.namespace):
            return "Empty namespace segment"
        if not parts.name:
            return "Empty name segment"
        if parts.version is not None and not all(parts.version.split(".")):
            return "Empty version segment"
        return None

    def _check_length(self, candidate: _Candidate) -> str | None:
        limit = self.config.max_length
        if len(candidate.text) > limit:
            return f"Identifier is {len(candidate.text)} characters long, maximum is {limit}"
        return None

    def _check_reserved(self, candidate: _Candidate) -> str | None:
        assert candidate.parts is not None
        name = candidate.parts.name
        if name in self.config.reserved_names:
            return f"Name '{name}' is reserved"
        return None

    def _check_vendor(self, candidate: _Candidate) -> str | None:
        cfg = self.config
        assert candidate.parts is not None
        vendor = candidate.parts.vendor
        if cfg.vendor is not None:
            expected = cfg.vendor.lower() if cfg.case_policy.folds_vendor else cfg.vendor
            if vendor != expected:
                return f"Vendor mismatch: '{vendor}' does not match required vendor '{expected}'"
        elif cfg.allowed_vendors:
            allowed = cfg.allowed_vendors
            if cfg.case_policy.folds_vendor:
                allowed = frozenset(v.lower() for v in allowed)
            if vendor not in allowed:
                return (
                    f"Vendor mismatch: '{vendor}' is not one of the allowed vendors "
                    f"({', '.join(sorted(allowed))})"
                )
        return None


RULES: tuple[tuple[ErrorKind, Rule], ...] = (
    (ErrorKind.INVALID_CHARACTER, GrammarValidator._check_charset),
    (ErrorKind.MALFORMED_GRAMMAR, GrammarValidator._check_structure),
    (ErrorKind.EMPTY_SEGMENT, GrammarValidator._check_empty),
    (ErrorKind.LENGTH_EXCEEDED, GrammarValidator._check_length),
    (ErrorKind.RESERVED_NAME, GrammarValidator._check_reserved),
    (ErrorKind.VENDOR_MISMATCH, GrammarValidator._check_vendor),
)
