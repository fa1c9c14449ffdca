# src/logging/handlers.py — v1
"""logging.Handler that appends records to a managed log file.

Records go through the session's resilient append writer, so stdlib
``logging`` output survives brief contention on the file just like
``write_log`` does. Without an explicit file the session's active log file
is used; with neither the record is dropped. Records on a channel
disabled in the session's settings are not persisted.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from logwarden.core.models import Channel
from logwarden.logging.context import LogSession, get_session


def channel_for_level(levelno: int) -> Channel:
    """Map a logging level to an output channel."""
    if levelno >= logging.ERROR:
        return Channel.ERROR
    if levelno >= logging.WARNING:
        return Channel.WARNING
    if levelno >= logging.INFO:
        return Channel.PLAIN
    return Channel.DEBUG


class ManagedFileHandler(logging.Handler):
    """Append formatted records to a log file via the resilient writer."""

    def __init__(
        self,
        session: LogSession | None = None,
        log_file: str | Path | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self._session = session
        self.log_file = Path(log_file).expanduser() if log_file else None
        self._emitting = False

    @property
    def session(self) -> LogSession:
        return self._session or get_session()

    def target(self) -> Path | None:
        if self.log_file is not None:
            return self.log_file
        active = self.session.get_active()
        return active.path if active is not None else None

    def emit(self, record: logging.LogRecord) -> None:
        # The writer logs its own failures; do not feed those back in.
        if self._emitting:
            return
        channel = channel_for_level(record.levelno)
        if not self.session.settings.channel_enabled(channel.value):
            return
        target = self.target()
        if target is None:
            return
        self._emitting = True
        try:
            line = self.format(record)
            result = self.session.writer.append(target, line + "\n")
            if not result.success:
                sys.stderr.write(
                    f"logwarden: dropped {channel.value} "
                    f"record for {target}: {result.error}\n"
                )
        except Exception:
            self.handleError(record)
        finally:
            self._emitting = False


def create_managed_handler(
    log_file: str | Path | None = None,
    session: LogSession | None = None,
    level: int = logging.NOTSET,
) -> ManagedFileHandler:
    """Create a handler writing to ``log_file`` (or the active log file).

    Args:
        log_file: Explicit target. None = the session's active log file.
        session: Session providing the writer. Context default if None.
        level: Minimum level handled.

    Returns:
        Configured ManagedFileHandler.
    """
    if log_file:
        Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
    return ManagedFileHandler(session=session, log_file=log_file, level=level)
