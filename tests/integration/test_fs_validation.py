"""Integration tests: walking a directory tree and validating it end to end."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from gts_validator.models.config import ValidationConfig
from gts_validator.models.errors import (
    ErrorKind,
    InvalidConfigError,
    LimitExceededError,
    PathNotFoundError,
    SourceReadError,
)
from gts_validator.models.identifier import SourceFormat
from gts_validator.pipeline import validate_fs
from gts_validator.source import format_for_path
from gts_validator.source.fs import FsSource, FsSourceConfig


def _write(root: Path, relative: str, content: str = "`acme:pkg/core`\n") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _relative(source: FsSource, root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in source.find_files()]


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    def test_lexicographic_order_and_extensions(self, tmp_path: Path) -> None:
        for name in ("b.md", "a/z.json", "a/b.yaml", "a/c.yml", "c.txt", "D.MD"):
            _write(tmp_path, name)
        source = FsSource(FsSourceConfig(paths=[tmp_path]))
        assert _relative(source, tmp_path) == ["D.MD", "a/b.yaml", "a/c.yml", "a/z.json", "b.md"]

    def test_format_for_path(self) -> None:
        assert format_for_path("docs/README.md") is SourceFormat.MARKDOWN
        assert format_for_path("x.yml") is SourceFormat.YAML
        assert format_for_path("x.JSON") is SourceFormat.JSON
        assert format_for_path("x.toml") is None

    def test_skip_directories(self, tmp_path: Path) -> None:
        for name in ("node_modules/x.md", ".git/y.md", "target/z.json", "vendor/v.yaml", "ok.md"):
            _write(tmp_path, name)
        assert _relative(FsSource(FsSourceConfig(paths=[tmp_path])), tmp_path) == ["ok.md"]

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("*.json", ["docs/a.md", "docs/nested/b.yaml"]),
            ("docs/nested/*", ["docs/a.md", "schemas/c.json"]),
            ("a.md", ["docs/nested/b.yaml", "schemas/c.json"]),
        ],
    )
    def test_exclude_patterns(self, tmp_path: Path, pattern: str, expected: list[str]) -> None:
        for name in ("docs/a.md", "docs/nested/b.yaml", "schemas/c.json"):
            _write(tmp_path, name)
        source = FsSource(FsSourceConfig(paths=[tmp_path], exclude=[pattern]))
        assert _relative(source, tmp_path) == expected

    def test_file_paths_are_accepted(self, tmp_path: Path) -> None:
        md = _write(tmp_path, "a.md")
        txt = _write(tmp_path, "b.txt")
        source = FsSource(FsSourceConfig(paths=[md, txt]))
        assert source.find_files() == [md]

    def test_duplicate_roots_are_scanned_once(self, tmp_path: Path) -> None:
        md = _write(tmp_path, "a.md")
        source = FsSource(FsSourceConfig(paths=[tmp_path, md]))
        assert source.find_files() == [md]

    def test_max_depth(self, tmp_path: Path) -> None:
        _write(tmp_path, "top.md")
        _write(tmp_path, "one/two.md")
        source = FsSource(FsSourceConfig(paths=[tmp_path], max_depth=0))
        assert _relative(source, tmp_path) == ["top.md"]

    def test_symlinks_are_not_followed_by_default(self, tmp_path: Path) -> None:
        _write(tmp_path, "real/linked.md")
        os.symlink(tmp_path / "real", tmp_path / "link", target_is_directory=True)
        assert _relative(FsSource(FsSourceConfig(paths=[tmp_path])), tmp_path) == [
            "real/linked.md"
        ]
        followed = FsSource(FsSourceConfig(paths=[tmp_path], follow_links=True))
        assert _relative(followed, tmp_path) == ["link/linked.md", "real/linked.md"]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
    def test_non_regular_files_are_skipped(self, tmp_path: Path) -> None:
        _write(tmp_path, "ok.md")
        os.mkfifo(tmp_path / "pipe.md")
        assert _relative(FsSource(FsSourceConfig(paths=[tmp_path])), tmp_path) == ["ok.md"]


# ---------------------------------------------------------------------------
# Run-level failures
# ---------------------------------------------------------------------------


class TestRunErrors:
    def test_no_paths(self) -> None:
        with pytest.raises(InvalidConfigError, match="No paths provided"):
            FsSource(FsSourceConfig(paths=[]))

    def test_missing_path(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope"
        with pytest.raises(PathNotFoundError) as exc_info:
            validate_fs(FsSourceConfig(paths=[missing]))
        assert exc_info.value.path == str(missing)

    def test_file_too_large(self, tmp_path: Path) -> None:
        _write(tmp_path, "big.md", "x" * 64)
        with pytest.raises(SourceReadError) as exc_info:
            validate_fs(FsSourceConfig(paths=[tmp_path], max_file_size=16))
        assert exc_info.value.kind == "file-too-large"

    def test_invalid_encoding(self, tmp_path: Path) -> None:
        (tmp_path / "bad.json").write_bytes(b'{"id": "\xff\xfe"}')
        with pytest.raises(SourceReadError) as exc_info:
            validate_fs(FsSourceConfig(paths=[tmp_path]))
        assert exc_info.value.kind == "invalid-encoding"

    def test_max_files(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.md")
        _write(tmp_path, "b.md")
        with pytest.raises(LimitExceededError, match="max_files"):
            validate_fs(FsSourceConfig(paths=[tmp_path], max_files=1))

    def test_max_total_bytes(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.md", "x" * 10)
        _write(tmp_path, "b.md", "y" * 10)
        with pytest.raises(LimitExceededError, match="max_total_bytes") as exc_info:
            validate_fs(FsSourceConfig(paths=[tmp_path], max_total_bytes=15))
        assert exc_info.value.limit == 15
        assert validate_fs(FsSourceConfig(paths=[tmp_path], max_total_bytes=20)).files_scanned == 2

    def test_symlinked_file_outside_root(self, tmp_path: Path) -> None:
        secret = _write(tmp_path, "outside/secret.md")
        root = tmp_path / "root"
        _write(root, "ok.md")
        os.symlink(secret, root / "leak.md")
        with pytest.raises(SourceReadError) as exc_info:
            validate_fs(FsSourceConfig(paths=[root]))
        assert exc_info.value.kind == "outside-repository"
        assert exc_info.value.file == str(root / "leak.md")

    def test_followed_directory_outside_root(self, tmp_path: Path) -> None:
        _write(tmp_path, "outside/linked.md")
        root = tmp_path / "root"
        root.mkdir()
        os.symlink(tmp_path / "outside", root / "link", target_is_directory=True)
        assert validate_fs(FsSourceConfig(paths=[root])).files_scanned == 0
        with pytest.raises(SourceReadError, match="outside repository root"):
            validate_fs(FsSourceConfig(paths=[root], follow_links=True))


# ---------------------------------------------------------------------------
# Sample repository
# ---------------------------------------------------------------------------


class TestSampleRepo:
    def test_report(self, sample_repo: Path) -> None:
        report = validate_fs(FsSourceConfig(paths=[sample_repo]))
        assert report.files_scanned == 3
        assert report.ok == 5
        assert report.errors_count == 1
        assert [Path(f.file).name for f in report.files] == ["README.md", "app.yaml", "order.json"]
        (error,) = report.errors
        assert error.kind is ErrorKind.EMPTY_SEGMENT
        assert error.raw_value == "acme::orders@1"
        assert (error.span.line, error.span.column) == (5, 13)

    def test_vendor_policy(self, sample_repo: Path) -> None:
        report = validate_fs(FsSourceConfig(paths=[sample_repo]), ValidationConfig(vendor="acme"))
        assert report.ok == 4
        assert [e.kind for e in report.errors] == [
            ErrorKind.EMPTY_SEGMENT,
            ErrorKind.VENDOR_MISMATCH,
        ]
        assert report.errors[1].json_path == "$.publishes[1]"

    def test_workers_match_serial_run(self, sample_repo: Path) -> None:
        fs_config = FsSourceConfig(paths=[sample_repo])
        assert validate_fs(fs_config, workers=3) == validate_fs(fs_config)
