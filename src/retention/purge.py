# src/retention/purge.py — v1
"""Purge policy evaluation for rotated log files.

Selection:
    1. List files in the directory whose name matches the glob (case-insensitive)
    2. Sort newest first by modification time
    3. keep_count >= 0: the newest keep_count files are protected
    4. max_age given: of the rest, only files older than max_age are selected

When both thresholds are given a file is deleted only if it is beyond the
protected rank AND older than max_age. Without any threshold nothing is
selected and a ConfigurationWarning is reported.
"""

from __future__ import annotations

import fnmatch
import logging
import warnings
from datetime import datetime, timedelta
from pathlib import Path

from logwarden.core.errors import ConfigurationWarning
from logwarden.core.models import PurgeCriteria, PurgeResult, ResolvedPath

logger = logging.getLogger(__name__)

NO_CRITERIA_WARNING = (
    "Purge skipped for {directory}: neither a maximum age nor a number of "
    "files to keep was supplied"
)


def matching_files(directory: Path, glob_pattern: str) -> list[Path]:
    """Regular files in ``directory`` whose name matches ``glob_pattern``."""
    if not directory.is_dir():
        return []
    pattern = glob_pattern.lower()
    return [
        entry
        for entry in directory.iterdir()
        if entry.is_file() and fnmatch.fnmatchcase(entry.name.lower(), pattern)
    ]


def evaluate_purge(criteria: PurgeCriteria, now: datetime | None = None) -> PurgeResult:
    """Select the files a purge would delete. Touches nothing on disk.

    Args:
        criteria: Directory, glob and thresholds.
        now: Reference time for the age threshold.

    Returns:
        PurgeResult with ``deletions`` (and ``warnings`` when no criteria).
    """
    if not criteria.has_criteria:
        message = NO_CRITERIA_WARNING.format(directory=criteria.directory)
        logger.warning(message)
        warnings.warn(message, ConfigurationWarning, stacklevel=2)
        return PurgeResult(warnings=[message])

    now = now or datetime.now()
    stamped: list[tuple[datetime, Path]] = []
    for path in matching_files(criteria.directory, criteria.glob_pattern):
        try:
            mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=now.tzinfo)
        except OSError:
            # Vanished between listing and stat
            continue
        stamped.append((mtime, path))

    stamped.sort(key=lambda item: (item[0], item[1].name), reverse=True)

    candidates = stamped
    if criteria.keep_count >= 0:
        candidates = candidates[criteria.keep_count:]

    if criteria.max_age is not None:
        candidates = [
            (mtime, path) for mtime, path in candidates
            if now - mtime > criteria.max_age
        ]

    deletions = [path for _, path in candidates]
    logger.debug(
        "Purge evaluation in %s (%s): %d matching, %d selected",
        criteria.directory, criteria.glob_pattern, len(stamped), len(deletions),
    )
    return PurgeResult(deletions=deletions)


def apply_purge(result: PurgeResult) -> PurgeResult:
    """Delete the selected files. Best-effort: failures are recorded, not raised."""
    for path in result.deletions:
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("Already gone, skipping: %s", path)
            continue
        except OSError as exc:
            logger.warning("Failed to delete log file %s: %s", path, exc)
            result.failed.append(path)
            continue
        result.deleted.append(path)

    if result.deleted:
        logger.info("Purged %d log file(s)", len(result.deleted))
    return result


def purge(criteria: PurgeCriteria, now: datetime | None = None) -> PurgeResult:
    """Evaluate and apply a purge in one step."""
    return apply_purge(evaluate_purge(criteria, now))


def purge_siblings(
    resolved: ResolvedPath,
    keep_count: int = -1,
    max_age: timedelta | None = None,
    now: datetime | None = None,
) -> PurgeResult:
    """Purge the siblings of a date-stamped file that is about to be created.

    The new file counts toward the kept set, so a positive keep_count is
    reduced by one before evaluation.
    """
    if resolved.purge_pattern is None:
        raise ValueError(f"No purge pattern for {resolved.path}")
    if keep_count > 0:
        keep_count -= 1
    criteria = PurgeCriteria(
        directory=resolved.path.parent,
        glob_pattern=resolved.purge_pattern,
        max_age=max_age,
        keep_count=keep_count,
    )
    return purge(criteria, now)
