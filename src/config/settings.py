# src/config/settings.py — v1
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Every variable is prefixed with ``LOGWARDEN_`` (e.g. ``LOGWARDEN_ERROR_ACTION=stop``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logwarden.core.errors import ConfigurationError
from logwarden.core.units import parse_duration


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_prefix="LOGWARDEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Diagnostics (logwarden's own logger) ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"

    # === Channel preferences ===
    verbose: bool = False
    debug: bool = False
    warning: bool = True

    # === Error escalation ===
    error_action: Literal["stop", "continue"] = "continue"

    # === Append retry ===
    retry_max_attempts: int = 5
    retry_delay_s: float = 2.0
    retry_permanent_errors: bool = False

    # === Formatting ===
    banner_width: int = 117
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    color_output: bool = True

    # === File creation defaults ===
    default_log_file: Path | None = None
    default_keep_files: int = -1
    default_purge_after: str | None = None

    # --- Validators ---

    @field_validator("retry_max_attempts")
    @classmethod
    def validate_retry_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        return v

    @field_validator("retry_delay_s")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry_delay_s must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.banner_width < 3:
            errors.append("BANNER_WIDTH must be >= 3")

        if self.default_keep_files < -1:
            errors.append("DEFAULT_KEEP_FILES must be >= -1 (-1 disables)")

        if self.default_purge_after is not None:
            try:
                parse_duration(self.default_purge_after)
            except ValueError as exc:
                errors.append(f"DEFAULT_PURGE_AFTER: {exc}")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def channel_enabled(self, channel: str) -> bool:
        """Whether lines on ``channel`` are echoed and persisted."""
        if channel == "verbose":
            return self.verbose
        if channel == "debug":
            return self.debug
        if channel == "warning":
            return self.warning
        return True


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
