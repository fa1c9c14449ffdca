# src/core/units.py — v1
"""Duration and byte-size string parsing.

Durations accept a short form (``"7d"``, ``"90m"``) or the canonical
``d.hh:mm:ss[.fff]`` form. Sizes accept ``"10MB"``-style strings.
"""

from __future__ import annotations

import re
from datetime import timedelta

from logwarden.core.errors import DurationFormatError, SizeFormatError

_SHORT_DURATION = re.compile(r"^(\d+)\s*([dhms])$", re.IGNORECASE)
_CANONICAL_DURATION = re.compile(
    r"^(?:(\d+)\.)?(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,7}))?)?$"
)
_SIZE = re.compile(r"^(\d+)\s*(B|KB|MB|GB|TB)$", re.IGNORECASE)

_DURATION_UNITS = {"d": "days", "h": "hours", "m": "minutes", "s": "seconds"}
_SIZE_MULTIPLIERS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
}


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Args:
        text: ``<integer><unit>`` with unit in d/h/m/s, or
            ``[days.]hours:minutes[:seconds[.fraction]]``.

    Returns:
        Parsed duration.

    Raises:
        DurationFormatError: If the string matches neither form or a
            field is out of range.
    """
    if not isinstance(text, str):
        raise DurationFormatError(f"Duration must be a string, got {type(text).__name__}")
    value = text.strip()

    match = _SHORT_DURATION.match(value)
    if match:
        amount = int(match.group(1))
        unit = _DURATION_UNITS[match.group(2).lower()]
        return timedelta(**{unit: amount})

    match = _CANONICAL_DURATION.match(value)
    if match:
        days, hours, minutes, seconds, fraction = match.groups()
        hours_i, minutes_i = int(hours), int(minutes)
        seconds_i = int(seconds) if seconds else 0
        if hours_i > 23 or minutes_i > 59 or seconds_i > 59:
            raise DurationFormatError(f"Duration field out of range: {text!r}")
        micro = int((fraction or "0").ljust(7, "0")[:6])
        return timedelta(
            days=int(days) if days else 0,
            hours=hours_i,
            minutes=minutes_i,
            seconds=seconds_i,
            microseconds=micro,
        )

    raise DurationFormatError(
        f"Invalid duration format: {text!r}. Use e.g. '7d', '90m' or '1.02:03:04'."
    )


def parse_size(text: str) -> int:
    """Parse size string like '10MB' into bytes.

    Supported suffixes: B, KB, MB, GB, TB (case-insensitive, binary multiples).
    """
    match = _SIZE.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise SizeFormatError(f"Invalid size format: {text!r}. Use e.g. '10MB'.")
    return int(match.group(1)) * _SIZE_MULTIPLIERS[match.group(2).upper()]


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the canonical ``d.hh:mm:ss`` form."""
    total = int(value.total_seconds())
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{days}.{hours:02d}:{minutes:02d}:{seconds:02d}"
