# src/naming/resolver.py — v1
"""Naming strategy resolution: base path + strategy + clock -> concrete path.

Suffix grammar:
    circular      {base}_{WeekdayName}{ext}     e.g. App_Monday.log
    date_stamped  {base}_{MMddyyyyHHmmss}{ext}  e.g. App_01012013000000.log

Circular naming has exactly seven slots and no year/month disambiguation.
Date-stamped names have one-second resolution; two creations within the
same second resolve to the same path.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

from logwarden.core.errors import LogPathError
from logwarden.core.models import NamingStrategy, ResolvedPath

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
TIMESTAMP_FORMAT = "%m%d%Y%H%M%S"
CIRCULAR_STALE_AFTER = timedelta(days=1)


def weekday_suffix(now: datetime) -> str:
    """English weekday name, independent of the process locale."""
    return WEEKDAY_NAMES[now.weekday()]


def timestamp_suffix(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def split_base_path(base_path: Path) -> tuple[Path, str, str]:
    """Split a path into (directory, base name, extension)."""
    return base_path.parent, base_path.stem, base_path.suffix


def purge_pattern_for(base_path: Path) -> str:
    """Glob matching every sibling generated from ``base_path``."""
    _, name, ext = split_base_path(base_path)
    return f"{name}*{ext}"


def last_modified(path: Path, now: datetime) -> datetime:
    """Return the file's mtime in the same timezone flavour as ``now``."""
    return datetime.fromtimestamp(path.stat().st_mtime, tz=now.tzinfo)


def resolve(
    base_path: Path | str,
    strategy: NamingStrategy | str = NamingStrategy.STANDARD,
    now: datetime | None = None,
    append: bool = False,
) -> ResolvedPath:
    """Compute the concrete log path and whether to append to it.

    Args:
        base_path: Requested log file path, e.g. ``logs/App.log``.
        strategy: Naming strategy to apply.
        now: Clock reading used for suffixes and staleness checks.
        append: Caller preference; only honoured by the standard strategy.

    Returns:
        ResolvedPath with the concrete path and append decision.

    Raises:
        LogPathError: If ``base_path`` (or the resolved path) is an
            existing directory. Raised before anything is created.
    """
    base = Path(base_path).expanduser()
    strategy = NamingStrategy(strategy)
    now = now or datetime.now()

    if base.is_dir():
        raise LogPathError(f"Log path is an existing directory: {base}")

    directory, name, ext = split_base_path(base)
    purge_pattern: str | None = None

    if strategy is NamingStrategy.STANDARD:
        path = base
        should_append = append
    elif strategy is NamingStrategy.CIRCULAR:
        path = directory / f"{name}_{weekday_suffix(now)}{ext}"
        should_append = True
        if path.is_file() and now - last_modified(path, now) >= CIRCULAR_STALE_AFTER:
            # Last week's file for this weekday
            should_append = False
    else:
        path = directory / f"{name}_{timestamp_suffix(now)}{ext}"
        should_append = False
        purge_pattern = f"{name}*{ext}"

    if path.is_dir():
        raise LogPathError(f"Resolved log path is an existing directory: {path}")

    directory.mkdir(parents=True, exist_ok=True)
    logger.debug(
        "Resolved %s (%s) -> %s (append=%s)", base, strategy.value, path, should_append,
    )
    return ResolvedPath(path=path, should_append=should_append, purge_pattern=purge_pattern)
