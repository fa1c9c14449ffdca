# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a fixed clock, an isolated LogSession with a no-op sleep, and a
helper that creates log files with controlled modification times.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest

from logwarden.config.settings import Settings
from logwarden.logging.context import LogSession, reset_session
from logwarden.writer.append import ResilientAppendWriter, RetryPolicy


# === FIXTURES: Clock ===


@pytest.fixture
def fixed_now() -> datetime:
    """A Wednesday, mid-day, naive local time."""
    return datetime(2024, 5, 15, 12, 0, 0)


# === FIXTURES: Session ===


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, color_output=False)


@pytest.fixture
def sleeps() -> list[float]:
    """Records every backoff requested by the session writer."""
    return []


@pytest.fixture
def session(settings: Settings, sleeps: list[float]) -> LogSession:
    """Session whose writer never actually sleeps."""
    writer = ResilientAppendWriter(
        RetryPolicy(
            max_attempts=settings.retry_max_attempts,
            delay_s=settings.retry_delay_s,
        ),
        sleep=sleeps.append,
    )
    return LogSession(settings=settings, writer=writer)


@pytest.fixture(autouse=True)
def _isolated_default_session():
    """Never leak the context default session between tests."""
    reset_session()
    yield
    reset_session()


# === FIXTURES: Filesystem ===


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Temporary log directory."""
    out = tmp_path / "logs"
    out.mkdir()
    return out


def _set_mtime(path: Path, when: datetime) -> None:
    ts = when.timestamp()
    os.utime(path, (ts, ts))


@pytest.fixture
def make_log_file() -> Callable[..., Path]:
    """Create a file with content and an mtime ``age`` before ``now``."""

    def _make(path: Path, now: datetime, age: timedelta = timedelta(0),
              content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        _set_mtime(path, now - age)
        return path

    return _make
