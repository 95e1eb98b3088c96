"""Filesystem source strategy: walk paths, apply excludes, read files as UTF-8."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from fnmatch import fnmatchcase
from pathlib import Path

from pydantic import BaseModel, Field

from gts_validator.models.errors import (
    InvalidConfigError,
    LimitExceededError,
    PathNotFoundError,
    SourceReadError,
)
from gts_validator.source import SourceDocument, format_for_path

logger = logging.getLogger("gts_validator.source.fs")

SKIP_DIRS = frozenset({".git", "node_modules", "target", "vendor", ".venv", "__pycache__"})


class FsSourceConfig(BaseModel):
    """Filesystem-specific source options."""

    paths: list[Path] = []
    exclude: list[str] = []
    max_file_size: int = Field(10_485_760, gt=0)
    max_files: int = Field(100_000, gt=0)
    max_total_bytes: int = Field(536_870_912, gt=0)
    # Following symlinks can escape the scanned tree, so it is opt-in.
    follow_links: bool = False
    max_depth: int = Field(64, ge=0)


def _is_excluded(path: Path, root: Path, patterns: list[str]) -> bool:
    candidates = [path.as_posix(), path.name]
    if path != root:
        candidates.append(path.relative_to(root).as_posix())
    return any(fnmatchcase(c, pattern) for pattern in patterns for c in candidates)


def read_bytes_bounded(path: Path, max_file_size: int) -> bytes:
    """Read *path*, refusing files larger than *max_file_size* bytes."""
    try:
        with path.open("rb") as handle:
            data = handle.read(max_file_size + 1)
    except OSError as exc:
        raise SourceReadError(str(path), "io-error", f"Failed to read file: {exc}") from exc
    if len(data) > max_file_size:
        raise SourceReadError(
            str(path), "file-too-large", f"File exceeds maximum size of {max_file_size:,} bytes"
        )
    return data


def decode_utf8(path: Path, data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceReadError(str(path), "invalid-encoding", "File is not valid UTF-8") from exc


class FsSource:
    """Yields ``SourceDocument``s for every scannable file, in lexicographic path order.

    Construction fails fast on empty or missing paths so that a run never starts
    against a misconfigured tree. Only regular files that resolve inside their
    scan root are read; anything resolving elsewhere aborts the run.
    """

    def __init__(self, config: FsSourceConfig) -> None:
        if not config.paths:
            raise InvalidConfigError("No paths provided for validation")
        for path in config.paths:
            if not path.exists():
                raise PathNotFoundError(str(path))
        self.config = config

    def find_files(self) -> list[Path]:
        found: set[Path] = set()
        for root in self.config.paths:
            if root.is_file():
                if format_for_path(root) and not _is_excluded(root, root, self.config.exclude):
                    found.add(root)
                continue
            found.update(self._walk(root))

        files = sorted(found, key=lambda p: p.as_posix())
        if len(files) > self.config.max_files:
            raise LimitExceededError("max_files", self.config.max_files)
        logger.debug("Discovered %d file(s) under %d path(s)", len(files), len(self.config.paths))
        return files

    def _walk(self, root: Path) -> Iterator[Path]:
        resolved_root = root.resolve()
        for dirpath, dirnames, filenames in os.walk(root, followlinks=self.config.follow_links):
            current = Path(dirpath)
            depth = len(current.relative_to(root).parts)
            if depth >= self.config.max_depth:
                dirnames[:] = []
            else:
                dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
            for name in filenames:
                path = current / name
                # is_file() is False for devices, FIFOs and sockets
                if format_for_path(path) is None or not path.is_file():
                    continue
                if _is_excluded(path, root, self.config.exclude):
                    continue
                resolved = path.resolve()
                if not resolved.is_relative_to(resolved_root):
                    raise SourceReadError(
                        str(path),
                        "outside-repository",
                        f"Path resolves outside repository root: {path} -> {resolved}",
                    )
                yield path

    def __iter__(self) -> Iterator[SourceDocument]:
        total_bytes = 0
        for path in self.find_files():
            source_format = format_for_path(path)
            assert source_format is not None
            data = read_bytes_bounded(path, self.config.max_file_size)
            total_bytes += len(data)
            if total_bytes > self.config.max_total_bytes:
                raise LimitExceededError("max_total_bytes", self.config.max_total_bytes)
            yield SourceDocument(
                file=str(path),
                source_format=source_format,
                content=decode_utf8(path, data),
            )
