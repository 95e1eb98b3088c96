"""``gts-validator`` command: validate GTS identifiers in docs and config files.

Exit status: 0 when every identifier is valid, 1 when invalid identifiers were
found (or a deadline left the run incomplete), 2 on run-level errors.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

import pydantic

from gts_validator import __version__
from gts_validator.models.config import CasePolicy, DiscoveryMode, ValidationConfig
from gts_validator.models.errors import InvalidConfigError, RunError
from gts_validator.models.report import ValidationReport
from gts_validator.output import render_human, render_json
from gts_validator.pipeline import validate_fs
from gts_validator.settings import Settings
from gts_validator.source.fs import FsSourceConfig

logger = logging.getLogger("gts_validator.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_RUN_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gts-validator",
        description="Validate GTS identifiers in Markdown, JSON and YAML files",
    )
    parser.add_argument("paths", nargs="*", help="Files or directories to scan (default: .)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--exclude", action="append", default=[], metavar="GLOB",
                        help="Glob pattern of files to skip (repeatable)")
    parser.add_argument("--vendor", help="Require every identifier to use this vendor")
    parser.add_argument("--allowed-vendor", action="append", default=[], metavar="VENDOR",
                        help="Accept only these vendors (repeatable)")
    parser.add_argument("--reserved-name", action="append", default=[], metavar="NAME",
                        help="Reject identifiers whose name is NAME (repeatable)")
    parser.add_argument("--max-length", type=int, help="Maximum identifier length")
    parser.add_argument("--case-policy", choices=[p.value for p in CasePolicy],
                        help="Which segments are compared case-insensitively")
    parser.add_argument("--discovery", choices=[m.value for m in DiscoveryMode],
                        help="How Markdown prose is searched for identifiers")
    parser.add_argument("--scan-keys", action="store_true", default=None,
                        help="Also validate JSON/YAML mapping keys")
    parser.add_argument("--skip-token", action="append", default=[], metavar="TEXT",
                        help="Skip Markdown candidates preceded by TEXT on the same line")
    parser.add_argument("--follow-links", action="store_true", default=None,
                        help="Follow symbolic links while walking directories")
    parser.add_argument("--format", choices=["human", "json"], default="human",
                        help="Report format")
    parser.add_argument("--color", choices=["auto", "always", "never"], default="auto",
                        help="Colorize human output")
    parser.add_argument("--timeout", type=float, help="Stop scanning after this many seconds")
    parser.add_argument("--workers", type=int, help="Validate files on this many threads")
    parser.add_argument("--log-level", help="Logging level (default from settings)")
    return parser


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


def _use_color(choice: str) -> bool:
    if choice == "always":
        return True
    if choice == "never" or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def _build_configs(
    args: argparse.Namespace, settings: Settings
) -> tuple[FsSourceConfig, ValidationConfig]:
    vendor = args.vendor if args.allowed_vendor else _pick(args.vendor, settings.vendor)
    config = ValidationConfig.create(
        vendor=vendor,
        allowed_vendors=frozenset(args.allowed_vendor),
        reserved_names=frozenset(args.reserved_name),
        max_length=_pick(args.max_length, settings.max_length),
        case_policy=_pick(args.case_policy, settings.case_policy),
        discovery_mode=_pick(args.discovery, settings.discovery_mode),
        scan_keys=_pick(args.scan_keys, settings.scan_keys),
        skip_tokens=tuple(args.skip_token),
    )
    try:
        fs_config = FsSourceConfig(
            paths=[Path(p) for p in (args.paths or ["."])],
            exclude=args.exclude,
            max_file_size=settings.max_file_size,
            max_files=settings.max_files,
            max_total_bytes=settings.max_total_bytes,
            follow_links=_pick(args.follow_links, settings.follow_links),
        )
    except pydantic.ValidationError as exc:
        raise InvalidConfigError(f"Invalid source options: {exc}") from exc
    return fs_config, config


def run(args: argparse.Namespace, settings: Settings) -> ValidationReport:
    fs_config, config = _build_configs(args, settings)
    return validate_fs(
        fs_config,
        config,
        timeout=_pick(args.timeout, settings.timeout),
        workers=_pick(args.workers, settings.workers),
    )


def main(argv: list[str] | None = None) -> int:
    """Run the validator using settings from environment / .env file and CLI flags."""
    settings = Settings()
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=_pick(args.log_level, settings.log_level).upper())
    logger.info("gts-validator v%s starting", __version__)

    try:
        report = run(args, settings)
    except RunError as exc:
        logger.debug("Run aborted", exc_info=True)
        print(f"gts-validator: error: {exc}", file=sys.stderr)
        return EXIT_RUN_ERROR

    if args.format == "json":
        sys.stdout.write(render_json(report) + "\n")
    else:
        sys.stdout.write(render_human(report, color=_use_color(args.color)))
    return EXIT_OK if report.passed else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
