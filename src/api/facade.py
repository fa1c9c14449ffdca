# src/api/facade.py — v1
"""Public API facade: create log files, write to them, purge old ones.

Usage:
    from logwarden.api.facade import new_log_file, write_log
    from logwarden.core.models import FileCreationConfig, WriteConfig

    new_log_file(FileCreationConfig(path="logs/App.log", naming_strategy="date_stamped",
                                    keep_number_of_files=10))
    write_log(WriteConfig(message="Started"))
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from logwarden.core.models import (
    FileCreationConfig,
    LogFileDescriptor,
    NamingStrategy,
    PurgeCriteria,
    PurgeResult,
    ResolvedPath,
)
from logwarden.core.units import parse_duration
from logwarden.logging.context import LogSession, get_session
from logwarden.naming.resolver import purge_pattern_for, resolve, split_base_path
from logwarden.output.formatting import write_banner, write_blank_lines, write_log
from logwarden.retention.purge import purge, purge_siblings

logger = logging.getLogger(__name__)

__all__ = [
    "new_log_file",
    "purge_logs",
    "write_banner",
    "write_blank_lines",
    "write_log",
]


def _purge_before_create(
    config: FileCreationConfig, resolved: ResolvedPath, now: datetime,
) -> PurgeResult | None:
    if not config.has_purge_criteria:
        return None
    if config.naming_strategy is NamingStrategy.STANDARD:
        logger.debug("Purge options ignored for standard naming: %s", resolved.path)
        return None
    if config.naming_strategy is NamingStrategy.DATE_STAMPED:
        return purge_siblings(
            resolved,
            keep_count=config.keep_number_of_files,
            max_age=config.max_age,
            now=now,
        )
    criteria = PurgeCriteria(
        directory=resolved.path.parent,
        glob_pattern=purge_pattern_for(Path(config.path).expanduser()),
        max_age=config.max_age,
        keep_count=config.keep_number_of_files,
    )
    return purge(criteria, now)


def _create_file(resolved: ResolvedPath) -> None:
    path = resolved.path
    if resolved.should_append and path.exists():
        logger.debug("Appending to existing log file %s", path)
        return
    if path.exists():
        path.unlink()
    path.touch()
    logger.debug("Created empty log file %s", path)


def new_log_file(
    config: FileCreationConfig,
    session: LogSession | None = None,
    now: datetime | None = None,
) -> LogFileDescriptor:
    """Create (or reopen) a log file and make it the active one.

    Steps:
      1. Resolve the concrete path (fails on directory collisions first)
      2. Purge siblings when a max age or keep count is given
      3. Truncate/create or keep the file depending on the append decision
      4. Set the session's active log file unless ``transient``

    Args:
        config: Creation options.
        session: Session whose active file is updated. Context default if None.
        now: Clock reading for naming and purge ages.

    Returns:
        Descriptor of the created file.

    Raises:
        LogPathError: If the path is an existing directory.
    """
    session = session or get_session()
    now = now or datetime.now()

    resolved = resolve(config.path, config.naming_strategy, now, append=config.append)
    _purge_before_create(config, resolved, now)
    _create_file(resolved)

    directory, base_name, extension = split_base_path(Path(config.path).expanduser())
    descriptor = LogFileDescriptor(
        path=resolved.path,
        base_name=base_name,
        extension=extension,
        directory=directory,
        naming_strategy=config.naming_strategy,
        created_at=now,
    )

    if config.transient:
        logger.info("Created transient log file %s", descriptor.path)
    else:
        session.set_active(descriptor)
        logger.info("Active log file is now %s", descriptor.path)
    return descriptor


def purge_logs(
    directory: Path | str,
    glob_pattern: str,
    purge_after: str | None = None,
    keep: int = -1,
    now: datetime | None = None,
) -> PurgeResult:
    """Delete matching log files by age and/or count.

    Without ``purge_after`` and ``keep`` nothing is deleted and a warning
    is reported in the result.
    """
    criteria = PurgeCriteria(
        directory=Path(directory),
        glob_pattern=glob_pattern,
        max_age=parse_duration(purge_after) if purge_after else None,
        keep_count=keep,
    )
    return purge(criteria, now)
