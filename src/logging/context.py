# src/logging/context.py — v1
"""Log session: the active log file handle plus the settings and writer
used by write operations.

A session is passed explicitly to write operations. Callers that do not
pass one get the request-scoped default held in a context variable.
A session is not thread-safe; use one per logical writer context.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field

from logwarden.config.settings import Settings
from logwarden.core.models import LogFileDescriptor
from logwarden.writer.append import ResilientAppendWriter, RetryPolicy


def writer_from_settings(settings: Settings) -> ResilientAppendWriter:
    """Build an append writer with the retry policy from ``settings``."""
    return ResilientAppendWriter(
        RetryPolicy(
            max_attempts=settings.retry_max_attempts,
            delay_s=settings.retry_delay_s,
            retry_permanent=settings.retry_permanent_errors,
        )
    )


@dataclass
class LogSession:
    """Holds at most one active log file for its owner."""

    settings: Settings = field(default_factory=Settings)
    writer: ResilientAppendWriter | None = None
    _active: LogFileDescriptor | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.writer is None:
            self.writer = writer_from_settings(self.settings)

    def set_active(self, descriptor: LogFileDescriptor) -> None:
        """Make ``descriptor`` the implicit write target, replacing any previous one."""
        self._active = descriptor

    def get_active(self) -> LogFileDescriptor | None:
        return self._active

    def clear_active(self) -> None:
        self._active = None


_session: contextvars.ContextVar[LogSession | None] = contextvars.ContextVar(
    "logwarden_session", default=None
)


def get_session() -> LogSession:
    """Return the current context's session, creating it on first use."""
    session = _session.get()
    if session is None:
        session = LogSession()
        _session.set(session)
    return session


def set_session(session: LogSession) -> contextvars.Token:
    """Install ``session`` as the current context's default."""
    return _session.set(session)


def reset_session(token: contextvars.Token | None = None) -> None:
    """Restore the previous session (or drop the default if no token)."""
    if token is not None:
        _session.reset(token)
    else:
        _session.set(None)


def peek_session() -> LogSession | None:
    """Return the current context's session without creating one."""
    return _session.get()
