"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from gts_validator.models.config import DEFAULT_MAX_LENGTH, CasePolicy, DiscoveryMode


class Settings(BaseSettings):
    """Defaults for the ``gts-validator`` command line.

    Values are read from ``GTS_VALIDATOR_*`` environment variables and from a
    ``.env`` file in the working directory. Command-line flags take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="GTS_VALIDATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Validation policy
    vendor: str | None = None
    max_length: int = DEFAULT_MAX_LENGTH
    case_policy: CasePolicy = CasePolicy.CASE_INSENSITIVE_SCHEME
    discovery_mode: DiscoveryMode = DiscoveryMode.STRICT
    scan_keys: bool = False

    # Filesystem source
    max_file_size: int = 10_485_760  # 10 MiB
    max_files: int = 100_000
    max_total_bytes: int = 536_870_912  # 512 MiB
    follow_links: bool = False

    # Run control
    timeout: float | None = None  # seconds; None runs to completion
    workers: int = 1
