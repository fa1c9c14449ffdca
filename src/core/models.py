# src/core/models.py — v1
"""Domain models: naming strategies, file descriptors, purge and write requests.

All models are pydantic v2. Descriptors and purge criteria are frozen; the
per-call configuration models validate eagerly so bad input fails before the
filesystem is touched.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logwarden.core.units import parse_duration

ErrorAction = Literal["stop", "continue"]


class NamingStrategy(str, Enum):
    """How a concrete log file name is derived from the base path."""

    STANDARD = "standard"
    CIRCULAR = "circular"
    DATE_STAMPED = "date_stamped"

    @classmethod
    def _missing_(cls, value: object) -> NamingStrategy | None:
        # Accept "Standard", "DateStamped", "date-stamped", ...
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "").replace("_", "")
            for member in cls:
                if member.value.replace("_", "") == key:
                    return member
        return None


class Channel(str, Enum):
    """Output channel of a log line."""

    PLAIN = "plain"
    VERBOSE = "verbose"
    DEBUG = "debug"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def _missing_(cls, value: object) -> Channel | None:
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return None


class LogFileDescriptor(BaseModel):
    """A created log file. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    path: Path
    base_name: str
    extension: str
    directory: Path
    naming_strategy: NamingStrategy
    created_at: datetime


class ResolvedPath(BaseModel):
    """Output of the naming resolver."""

    model_config = ConfigDict(frozen=True)

    path: Path
    should_append: bool
    purge_pattern: str | None = None


class PurgeCriteria(BaseModel):
    """Thresholds for a single purge invocation."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    glob_pattern: str
    max_age: timedelta | None = None
    keep_count: int = -1

    @field_validator("keep_count")
    @classmethod
    def validate_keep_count(cls, v: int) -> int:
        """-1 disables count-based retention; anything lower is a mistake."""
        if v < -1:
            raise ValueError("keep_count must be >= -1")
        return v

    @field_validator("max_age")
    @classmethod
    def validate_max_age(cls, v: timedelta | None) -> timedelta | None:
        if v is not None and v < timedelta(0):
            raise ValueError("max_age must not be negative")
        return v

    @property
    def has_criteria(self) -> bool:
        return self.max_age is not None or self.keep_count >= 0


class PurgeResult(BaseModel):
    """Paths selected for deletion, and what happened when they were removed."""

    deletions: list[Path] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    deleted: list[Path] = Field(default_factory=list)
    failed: list[Path] = Field(default_factory=list)


class AppendResult(BaseModel):
    """Outcome of one resilient append."""

    path: Path
    success: bool
    attempts: int
    error: str | None = None


class FileCreationConfig(BaseModel):
    """Options for creating a log file."""

    path: Path
    naming_strategy: NamingStrategy = NamingStrategy.STANDARD
    append: bool = False
    transient: bool = False
    purge_after: str | None = None
    keep_number_of_files: int = -1

    def __init__(self, **data: Any) -> None:
        # Malformed durations surface as DurationFormatError, not pydantic's ValidationError.
        purge_after = data.get("purge_after")
        if isinstance(purge_after, str):
            parse_duration(purge_after)
        super().__init__(**data)

    @field_validator("purge_after")
    @classmethod
    def validate_purge_after(cls, v: str | None) -> str | None:
        if v is not None:
            parse_duration(v)
        return v

    @field_validator("keep_number_of_files")
    @classmethod
    def validate_keep_number_of_files(cls, v: int) -> int:
        if v < -1:
            raise ValueError("keep_number_of_files must be >= -1")
        return v

    @property
    def max_age(self) -> timedelta | None:
        return parse_duration(self.purge_after) if self.purge_after else None

    @property
    def has_purge_criteria(self) -> bool:
        return self.purge_after is not None or self.keep_number_of_files >= 0


class WriteConfig(BaseModel):
    """A single write request. Consumed immediately, never retained."""

    message: Any = ""
    log_file: Path | None = None
    no_timestamp: bool = False
    channel: Channel = Channel.PLAIN
    color: str | None = None
    error_action: ErrorAction | None = None
