# src/output/formatting.py — v1
"""Formatting layer: timestamps, channel gating, object rendering, banners.

The channel gate decides persistence, not just console visibility: a
verbose/debug/warning line whose preference is off is neither echoed nor
written. Banner width is a constant, independent of the terminal.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from logwarden.core.errors import PersistentIOError
from logwarden.core.models import AppendResult, Channel, WriteConfig
from logwarden.logging.context import LogSession, get_session

logger = logging.getLogger(__name__)

BANNER_WIDTH = 117
BANNER_RULE_CHAR = "="

CHANNEL_LABELS: dict[Channel, str] = {
    Channel.PLAIN: "",
    Channel.VERBOSE: "VERBOSE: ",
    Channel.DEBUG: "DEBUG: ",
    Channel.WARNING: "WARNING: ",
    Channel.ERROR: "ERROR: ",
}

ANSI_COLORS: dict[str, str] = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "gray": "90",
    "grey": "90",
}
_DEFAULT_CHANNEL_COLORS: dict[Channel, str] = {
    Channel.WARNING: "yellow",
    Channel.ERROR: "red",
    Channel.DEBUG: "gray",
}


def _as_mapping(obj: Any) -> Mapping[str, Any] | None:
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Mapping):
        return obj
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
    return None


def render_object(obj: Any) -> str:
    """Render any value as text; structured objects become a property dump.

    Example:
        >>> print(render_object({"name": "app", "size": 3}))
        name : app
        size : 3
    """
    if isinstance(obj, str):
        return obj
    if obj is None:
        return ""
    if isinstance(obj, (BaseException, Enum)):
        return str(obj)
    mapping = _as_mapping(obj)
    if mapping is None:
        if isinstance(obj, (list, tuple, set, frozenset)):
            return "\n".join(render_object(item) for item in obj)
        return str(obj)
    if not mapping:
        return "" if isinstance(obj, Mapping) else str(obj)
    width = max(len(str(key)) for key in mapping)
    return "\n".join(f"{str(key).ljust(width)} : {value}" for key, value in mapping.items())


def format_line(
    text: str,
    channel: Channel = Channel.PLAIN,
    timestamp: bool = True,
    now: datetime | None = None,
    timestamp_format: str = "%Y-%m-%d %H:%M:%S",
) -> str:
    """Prefix ``text`` with the timestamp and channel label."""
    prefix = CHANNEL_LABELS[channel]
    if timestamp:
        stamp = (now or datetime.now()).strftime(timestamp_format)
        prefix = f"{stamp} {prefix}"
    return f"{prefix}{text}"


def render_banner(message: str, width: int = BANNER_WIDTH) -> list[str]:
    """Rule line, centred message, rule line, each ``width`` characters wide."""
    rule = BANNER_RULE_CHAR * width
    return [rule, message.center(width), rule]


def _colorize(text: str, color: str | None, stream: TextIO, enabled: bool) -> str:
    code = ANSI_COLORS.get((color or "").lower())
    if not enabled or code is None or not getattr(stream, "isatty", lambda: False)():
        return text
    return f"\033[{code}m{text}\033[0m"


def _echo(line: str, channel: Channel, color: str | None, session: LogSession,
          stream: TextIO | None) -> None:
    if stream is None:
        stream = sys.stderr if channel is Channel.ERROR else sys.stdout
    color = color or _DEFAULT_CHANNEL_COLORS.get(channel)
    print(_colorize(line, color, stream, session.settings.color_output), file=stream)


def resolve_target(config: WriteConfig, session: LogSession) -> Path | None:
    """Explicit log file first, then the session's active log file."""
    if config.log_file is not None:
        return config.log_file
    active = session.get_active()
    return active.path if active is not None else None


def write_log(
    config: WriteConfig,
    session: LogSession | None = None,
    now: datetime | None = None,
    stream: TextIO | None = None,
) -> AppendResult | None:
    """Format a message, echo it, and append it to the target log file.

    Returns:
        The append result, or None when the channel is disabled or there
        is no target file (console only).

    Raises:
        PersistentIOError: If the append failed and the error action is
            ``stop``.
    """
    session = session or get_session()
    settings = session.settings
    if not settings.channel_enabled(config.channel.value):
        return None

    line = format_line(
        render_object(config.message),
        channel=config.channel,
        timestamp=not config.no_timestamp,
        now=now,
        timestamp_format=settings.timestamp_format,
    )
    _echo(line, config.channel, config.color, session, stream)

    target = resolve_target(config, session)
    if target is None:
        return None

    result = session.writer.append(target, line + "\n")
    if not result.success:
        action = config.error_action or settings.error_action
        if action == "stop":
            raise PersistentIOError(str(target), result.attempts, result.error)
        logger.warning(
            "Continuing after failed write to %s: %s", target, result.error,
        )
    return result


def write_banner(
    message: str,
    session: LogSession | None = None,
    log_file: Path | None = None,
    color: str | None = None,
    stream: TextIO | None = None,
) -> list[AppendResult | None]:
    """Write a banner (rule / centred message / rule) without timestamps."""
    session = session or get_session()
    return [
        write_log(
            WriteConfig(message=line, log_file=log_file, no_timestamp=True, color=color),
            session,
            stream=stream,
        )
        for line in render_banner(message, session.settings.banner_width)
    ]


def write_blank_lines(
    count: int = 1,
    session: LogSession | None = None,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> list[AppendResult | None]:
    """Pad the log (and console) with ``count`` empty lines."""
    session = session or get_session()
    return [
        write_log(WriteConfig(message="", log_file=log_file, no_timestamp=True),
                  session, stream=stream)
        for _ in range(count)
    ]
