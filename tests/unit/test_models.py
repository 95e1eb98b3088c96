"""Tests for Pydantic domain models and validation config."""

from __future__ import annotations

import pydantic
import pytest

from gts_validator.models.config import CasePolicy, DiscoveryMode, ValidationConfig
from gts_validator.models.errors import (
    ErrorKind,
    InvalidConfigError,
    LimitExceededError,
    PathNotFoundError,
    RunError,
    SourceReadError,
    SourceSpan,
    ValidationError,
)
from gts_validator.models.identifier import GtsIdentifier, RawToken, SourceFormat
from gts_validator.models.report import FileResult, ValidationReport


class TestEnums:
    def test_error_kind_values(self) -> None:
        assert ErrorKind.MALFORMED_GRAMMAR == "MalformedGrammar"
        assert ErrorKind.EMPTY_SEGMENT == "EmptySegment"
        assert ErrorKind.VENDOR_MISMATCH == "VendorMismatch"

    def test_source_format_values(self) -> None:
        assert SourceFormat("markdown") is SourceFormat.MARKDOWN
        assert SourceFormat.YAML == "yaml"

    def test_case_policy_folding(self) -> None:
        assert CasePolicy.CASE_INSENSITIVE_SCHEME.folds_scheme
        assert not CasePolicy.CASE_INSENSITIVE_SCHEME.folds_vendor
        assert CasePolicy.CASE_INSENSITIVE_SCHEME_VENDOR.folds_vendor
        assert not CasePolicy.CASE_SENSITIVE.folds_scheme


class TestRawToken:
    def test_span(self) -> None:
        token = RawToken(
            text="acme:pkg/core", file="a.md", line=3, column=9, source_format=SourceFormat.MARKDOWN
        )
        assert token.span == SourceSpan(file="a.md", line=3, column=9)

    def test_positions_are_one_based(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RawToken(text="x", file="a.md", line=0, column=1, source_format=SourceFormat.JSON)

    def test_immutable(self) -> None:
        token = RawToken(text="x", file="a.md", line=1, column=1, source_format=SourceFormat.YAML)
        with pytest.raises(pydantic.ValidationError):
            token.text = "y"


class TestGtsIdentifier:
    def test_render(self) -> None:
        ident = GtsIdentifier(
            scheme="gts",
            vendor="acme",
            namespace=("pkg", "sub"),
            name="core",
            version="1.0",
            span=SourceSpan(file="a.md", line=1, column=1),
        )
        assert str(ident) == "gts:acme:pkg/sub/core@1.0"
        assert ident.render(separator="#") == "gts#acme#pkg/sub/core@1.0"

    def test_render_without_version(self) -> None:
        ident = GtsIdentifier(
            scheme="gts",
            vendor="acme",
            namespace=("pkg",),
            name="core",
            span=SourceSpan(file="a.md", line=1, column=1),
        )
        assert str(ident) == "gts:acme:pkg/core"


class TestValidationError:
    def test_format_human_readable(self) -> None:
        error = ValidationError(
            kind=ErrorKind.EMPTY_SEGMENT,
            message="Empty vendor segment",
            span=SourceSpan(file="docs/a.md", line=4, column=12),
            raw_value="gts::pkg/x",
        )
        assert error.format_human_readable() == (
            "docs/a.md:4:12: EmptySegment — Empty vendor segment"
        )


class TestReport:
    def test_file_result_counts(self) -> None:
        span = SourceSpan(file="a.md", line=1, column=1)
        result = FileResult(
            file="a.md",
            source_format=SourceFormat.MARKDOWN,
            ok=(GtsIdentifier(scheme="gts", vendor="a", namespace=("b",), name="c", span=span),),
            errors=(
                ValidationError(
                    kind=ErrorKind.MALFORMED_GRAMMAR, message="m", span=span, raw_value="x:y"
                ),
            ),
        )
        assert result.ok_count == 1
        assert result.errors_count == 1
        assert result.token_count == 2

    def test_empty_report_passes(self) -> None:
        report = ValidationReport()
        assert report.passed
        assert report.errors == []

    def test_incomplete_report_does_not_pass(self) -> None:
        assert not ValidationReport(incomplete=True).passed


class TestValidationConfig:
    def test_defaults(self) -> None:
        config = ValidationConfig()
        assert config.vendor is None
        assert config.max_length == 256
        assert config.case_policy is CasePolicy.CASE_INSENSITIVE_SCHEME
        assert config.discovery_mode is DiscoveryMode.STRICT
        assert config.separator == ":"

    def test_collections_are_coerced(self) -> None:
        config = ValidationConfig(reserved_names=["core", "core"], skip_tokens=["**given**"])
        assert config.reserved_names == frozenset({"core"})
        assert config.skip_tokens == ("**given**",)

    @pytest.mark.parametrize(
        "options",
        [
            {"max_length": 0},
            {"max_length": -1},
            {"vendor": "  "},
            {"vendor": "acme", "allowed_vendors": ["globex"]},
            {"separator": "::"},
            {"separator": "-"},
            {"separator": "/"},
            {"path_separator": "@"},
            {"scheme": ""},
            {"unknown_option": True},
        ],
    )
    def test_create_rejects_invalid_options(self, options: dict) -> None:
        with pytest.raises(InvalidConfigError, match="Invalid validation config"):
            ValidationConfig.create(**options)

    def test_create_returns_config(self) -> None:
        config = ValidationConfig.create(vendor="acme", max_length=64)
        assert config.vendor == "acme"
        assert config.max_length == 64

    def test_config_is_hashable_and_frozen(self) -> None:
        config = ValidationConfig(vendor="acme")
        assert hash(config) == hash(ValidationConfig(vendor="acme"))
        with pytest.raises(pydantic.ValidationError):
            config.vendor = "other"

    def test_canonical_scheme_follows_case_policy(self) -> None:
        assert ValidationConfig(scheme="GTS").canonical_scheme == "gts"
        config = ValidationConfig(scheme="GTS", case_policy=CasePolicy.CASE_SENSITIVE)
        assert config.canonical_scheme == "GTS"


class TestRunErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(InvalidConfigError, RunError)
        assert issubclass(PathNotFoundError, RunError)
        assert issubclass(SourceReadError, RunError)

    def test_source_read_error_carries_kind(self) -> None:
        exc = SourceReadError("docs/a.md", "io-error", "Failed to read file")
        assert exc.file == "docs/a.md"
        assert exc.kind == "io-error"
        assert str(exc) == "docs/a.md: Failed to read file"

    def test_limit_exceeded_names_the_limit(self) -> None:
        exc = LimitExceededError("max_total_bytes", 536_870_912)
        assert isinstance(exc, RunError)
        assert (exc.name, exc.limit) == ("max_total_bytes", 536_870_912)
        assert str(exc) == "Scan aborted: max_total_bytes limit (536,870,912) reached"
