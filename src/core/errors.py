# src/core/errors.py — v1
"""Exception hierarchy for log-file lifecycle operations.

Validation errors fail fast before the filesystem is touched. I/O errors are
absorbed by the append writer's retry loop and only surface as
PersistentIOError when the caller asked for escalation.
"""

from __future__ import annotations


class LogwardenError(Exception):
    """Base class for all logwarden errors."""


class ConfigurationError(LogwardenError):
    """Raised when settings are internally inconsistent."""


class ValidationError(LogwardenError, ValueError):
    """Invalid input detected before any filesystem mutation."""


class DurationFormatError(ValidationError):
    """A duration string could not be parsed."""


class SizeFormatError(ValidationError):
    """A byte-size string could not be parsed."""


class LogPathError(ValidationError):
    """A log file path is unusable (e.g. it names an existing directory)."""


class TransientIOError(LogwardenError, OSError):
    """A write was blocked by contention and may succeed on retry."""


class PersistentIOError(LogwardenError, OSError):
    """An append could not be completed within the retry budget."""

    def __init__(self, path: str, attempts: int, last_error: str | None) -> None:
        self.path = path
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed to write to '{path}' after {attempts} attempt(s): {last_error}"
        )


class ConfigurationWarning(UserWarning):
    """Reported (not raised) when an operation is a no-op due to missing criteria."""
