"""Canonicalization of raw tokens before grammar checks.

Only incidental formatting noise is removed. Structural defects such as
repeated separators are left in place for the grammar validator to report.
"""

from __future__ import annotations

from gts_validator.models.config import ValidationConfig
from gts_validator.models.identifier import NormalizedIdentifier, RawToken

_DELIMITERS = ("`", "'", '"')


class Normalizer:
    def __init__(self, config: ValidationConfig | None = None) -> None:
        self._config = config or ValidationConfig()

    def normalize(self, token: RawToken) -> NormalizedIdentifier:
        return NormalizedIdentifier(canonical_text=self.canonicalize(token.text), origin=token)

    def canonicalize(self, text: str) -> str:
        """Apply every rule until the text stops changing, so the result is a fixed point."""
        previous = None
        while text != previous:
            previous = text
            text = self._strip_delimiters(text.strip())
            text = self._strip_uri_slashes(text)
            text = self._fold_case(text)
        return text

    @staticmethod
    def _strip_delimiters(text: str) -> str:
        for delimiter in _DELIMITERS:
            if len(text) >= 2 and text.startswith(delimiter) and text.endswith(delimiter):
                return text[1:-1]
        return text

    def _strip_uri_slashes(self, text: str) -> str:
        sep = self._config.separator
        prefix = f"{self._config.scheme}{sep}//"
        head = text[: len(prefix)]
        if self._config.case_policy.folds_scheme:
            head, prefix = head.lower(), prefix.lower()
        if head == prefix:
            return text[: len(prefix) - 2] + text[len(prefix) :]
        return text

    def _fold_case(self, text: str) -> str:
        policy = self._config.case_policy
        body, vsep, version = text.partition(self._config.version_separator)
        parts = body.split(self._config.separator)
        if len(parts) >= 3:
            scheme_index, vendor_index = 0, 1
        elif len(parts) == 2:
            scheme_index, vendor_index = None, 0
        else:
            return text
        if policy.folds_scheme and scheme_index is not None:
            parts[scheme_index] = parts[scheme_index].lower()
        if policy.folds_vendor:
            parts[vendor_index] = parts[vendor_index].lower()
        return self._config.separator.join(parts) + vsep + version
