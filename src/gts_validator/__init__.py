"""GTS identifier validator for documentation and configuration files."""

__version__ = "0.1.0"

from gts_validator.models import (  # noqa: E402
    CasePolicy,
    DiscoveryMode,
    ErrorKind,
    FileResult,
    GtsIdentifier,
    RunError,
    ValidationConfig,
    ValidationError,
    ValidationReport,
)
from gts_validator.pipeline import validate, validate_document, validate_fs  # noqa: E402
from gts_validator.source import SourceDocument  # noqa: E402
from gts_validator.source.fs import FsSource, FsSourceConfig  # noqa: E402

__all__ = [
    "CasePolicy",
    "DiscoveryMode",
    "ErrorKind",
    "FileResult",
    "FsSource",
    "FsSourceConfig",
    "GtsIdentifier",
    "RunError",
    "SourceDocument",
    "ValidationConfig",
    "ValidationError",
    "ValidationReport",
    "__version__",
    "validate",
    "validate_document",
    "validate_fs",
]
