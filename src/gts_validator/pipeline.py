"""Orchestrates a validation run: Source → Extract → Normalize → Validate → Aggregate."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from gts_validator.aggregate import ReportAggregator
from gts_validator.extract import extract_tokens
from gts_validator.grammar import GrammarValidator
from gts_validator.models.config import ValidationConfig
from gts_validator.models.errors import InvalidConfigError, ValidationError
from gts_validator.models.identifier import GtsIdentifier, SourceFormat
from gts_validator.models.report import FileResult, ValidationReport
from gts_validator.normalize import Normalizer
from gts_validator.source import SourceDocument
from gts_validator.source.fs import FsSource, FsSourceConfig

logger = logging.getLogger("gts_validator.pipeline")

SourceLike = SourceDocument | tuple[str, SourceFormat | str, str]


class ValidationPipeline:
    """Validates documents one at a time against a fixed config."""

    def __init__(self, config: ValidationConfig) -> None:
        self.config = config
        self._normalizer = Normalizer(config)
        self._validator = GrammarValidator(config)

    def validate_document(self, document: SourceDocument) -> FileResult:
        ok: list[GtsIdentifier] = []
        errors: list[ValidationError] = []
        tokens = extract_tokens(
            document.content, document.source_format, document.file, self.config
        )
        for token in tokens:
            outcome = self._validator.validate(self._normalizer.normalize(token))
            if isinstance(outcome, ValidationError):
                errors.append(outcome)
            else:
                ok.append(outcome)
        logger.debug(
            "%s: %d identifier(s) ok, %d invalid", document.file, len(ok), len(errors)
        )
        return FileResult(
            file=document.file,
            source_format=document.source_format,
            ok=tuple(ok),
            errors=tuple(errors),
        )


def _as_document(source: SourceLike) -> SourceDocument:
    if isinstance(source, SourceDocument):
        return source
    file, source_format, content = source
    return SourceDocument(file=str(file), source_format=SourceFormat(source_format), content=content)


def _check_run_options(
    config: ValidationConfig, timeout: float | None, workers: int
) -> None:
    if not isinstance(config, ValidationConfig):
        raise InvalidConfigError(
            f"config must be a ValidationConfig, got {type(config).__name__}"
        )
    if timeout is not None and timeout <= 0:
        raise InvalidConfigError(f"timeout must be positive, got {timeout}")
    if workers < 1:
        raise InvalidConfigError(f"workers must be at least 1, got {workers}")


def validate_document(
    file: str,
    source_format: SourceFormat | str,
    content: str,
    config: ValidationConfig | None = None,
) -> FileResult:
    """Validate a single in-memory document."""
    pipeline = ValidationPipeline(config or ValidationConfig())
    return pipeline.validate_document(_as_document((file, source_format, content)))


def validate(
    sources: Iterable[SourceLike],
    config: ValidationConfig | None = None,
    *,
    timeout: float | None = None,
    workers: int = 1,
) -> ValidationReport:
    """Validate every document supplied by *sources* and build the report.

    Run-level failures raised by the source (``RunError``) propagate and no
    report is produced. When *timeout* seconds elapse, the run stops before
    the next file and the report is flagged ``incomplete``.
    """
    config = config or ValidationConfig()
    _check_run_options(config, timeout, workers)

    pipeline = ValidationPipeline(config)
    aggregator = ReportAggregator()
    deadline = time.monotonic() + timeout if timeout is not None else None
    documents = (_as_document(source) for source in sources)

    incomplete = False
    if workers == 1:
        for document in documents:
            if _expired(deadline, aggregator):
                incomplete = True
                break
            aggregator.add(pipeline.validate_document(document))
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # At most `workers` files are in flight; results are drained in
            # submission order, so the report keeps scan order.
            window: deque[Future[FileResult]] = deque()
            for document in documents:
                if _expired(deadline, aggregator):
                    incomplete = True
                    break
                window.append(executor.submit(pipeline.validate_document, document))
                if len(window) >= workers:
                    aggregator.add(window.popleft().result())
            while window:
                aggregator.add(window.popleft().result())

    report = aggregator.build(incomplete=incomplete)
    logger.info(
        "Validation finished: %d file(s) scanned, %d ok, %d error(s)%s",
        report.files_scanned,
        report.ok,
        report.errors_count,
        " (incomplete)" if report.incomplete else "",
    )
    return report


def _expired(deadline: float | None, aggregator: ReportAggregator) -> bool:
    if deadline is None or time.monotonic() < deadline:
        return False
    logger.warning(
        "Run deadline reached after %d file(s); report is incomplete",
        aggregator.files_scanned,
    )
    return True


def validate_fs(
    fs_config: FsSourceConfig,
    config: ValidationConfig | None = None,
    *,
    timeout: float | None = None,
    workers: int = 1,
) -> ValidationReport:
    """Validate identifiers in files on disk."""
    return validate(FsSource(fs_config), config, timeout=timeout, workers=workers)
