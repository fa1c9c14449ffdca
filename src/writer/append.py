# src/writer/append.py — v1
"""Append writer with bounded, fixed-backoff retry.

Another process briefly holding the log file open must not lose the line,
so transient failures are retried (5 attempts, 2s apart by default).
Permanent failures such as a missing permission or a path through a regular
file stop at the first attempt unless the policy asks to retry everything.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, TextIO

from logwarden.core.errors import TransientIOError
from logwarden.core.models import AppendResult

logger = logging.getLogger(__name__)

ErrorKind = Literal["transient", "permanent"]
Opener = Callable[[Path], TextIO]

# ERROR_SHARING_VIOLATION, ERROR_LOCK_VIOLATION
_WINDOWS_CONTENTION_CODES = frozenset({32, 33})


@dataclass(frozen=True)
class RetryPolicy:
    """Retry budget for one append."""

    max_attempts: int = 5
    delay_s: float = 2.0
    retry_permanent: bool = False

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay_s < 0:
            raise ValueError("delay_s must be >= 0")


DEFAULT_RETRY_POLICY = RetryPolicy()


def classify_error(error: Exception) -> ErrorKind:
    """Classify a write failure as worth retrying or not."""
    if isinstance(error, TransientIOError):
        return "transient"
    if isinstance(error, PermissionError):
        if getattr(error, "winerror", None) in _WINDOWS_CONTENTION_CODES:
            return "transient"
        return "permanent"
    if isinstance(error, (IsADirectoryError, NotADirectoryError, FileNotFoundError)):
        return "permanent"
    if isinstance(error, OSError):
        return "transient"
    return "permanent"


def _open_for_append(path: Path) -> TextIO:
    return path.open("a", encoding="utf-8", errors="backslashreplace")


class ResilientAppendWriter:
    """Append text to a file, retrying transient failures.

    Args:
        policy: Attempt budget and backoff.
        sleep: Called with the backoff in seconds between attempts.
        opener: Opens ``path`` for appending; defaults to UTF-8 append mode.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        opener: Opener | None = None,
    ) -> None:
        self.policy = policy or DEFAULT_RETRY_POLICY
        self._sleep = sleep
        self._opener = opener or _open_for_append

    def _write_once(self, path: Path, text: str) -> None:
        with self._opener(path) as handle:
            handle.write(text)

    def append(self, path: Path | str, text: str) -> AppendResult:
        """Append ``text`` to ``path``. Never raises for I/O failures.

        Returns:
            AppendResult with the number of attempts made and, on failure,
            the last error message.
        """
        target = Path(path)
        policy = self.policy
        last_error: str | None = None

        for attempt in range(1, policy.max_attempts + 1):
            try:
                self._write_once(target, text)
            except (OSError, UnicodeError) as exc:
                last_error = str(exc)
                kind = classify_error(exc)
                if kind == "permanent" and not policy.retry_permanent:
                    logger.error("Write to %s failed permanently: %s", target, exc)
                    return AppendResult(
                        path=target, success=False, attempts=attempt, error=last_error,
                    )
                if attempt == policy.max_attempts:
                    break
                logger.warning(
                    "Write to %s failed (%s, attempt %d/%d), retrying in %.1fs",
                    target, kind, attempt, policy.max_attempts, policy.delay_s,
                )
                self._sleep(policy.delay_s)
            else:
                return AppendResult(path=target, success=True, attempts=attempt)

        logger.error(
            "Write to %s failed after %d attempts: %s",
            target, policy.max_attempts, last_error,
        )
        return AppendResult(
            path=target, success=False, attempts=policy.max_attempts, error=last_error,
        )
