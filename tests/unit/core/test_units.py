# tests/unit/core/test_units.py — v1
"""Tests for core/units.py — duration and size parsing."""

from __future__ import annotations

from datetime import timedelta

import pytest

from logwarden.core.errors import DurationFormatError, SizeFormatError, ValidationError
from logwarden.core.units import format_duration, parse_duration, parse_size


class TestParseDurationShortForm:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("5m", timedelta(minutes=5)),
            ("3d", timedelta(days=3)),
            ("90m", timedelta(minutes=90)),
            ("12h", timedelta(hours=12)),
            ("45s", timedelta(seconds=45)),
            ("0d", timedelta(0)),
        ],
    )
    def test_units(self, text, expected):
        assert parse_duration(text) == expected

    def test_case_insensitive(self):
        assert parse_duration("7D") == timedelta(days=7)

    def test_whitespace_tolerated(self):
        assert parse_duration("  7 d ") == timedelta(days=7)


class TestParseDurationCanonical:
    def test_days_hours_minutes_seconds(self):
        assert parse_duration("1.02:03:04") == timedelta(days=1, hours=2, minutes=3, seconds=4)

    def test_fraction(self):
        assert parse_duration("0.00:00:01.500") == timedelta(seconds=1, milliseconds=500)

    def test_without_days(self):
        assert parse_duration("00:30:00") == timedelta(minutes=30)

    def test_hours_minutes_only(self):
        assert parse_duration("02:15") == timedelta(hours=2, minutes=15)

    def test_seven_days(self):
        assert parse_duration("7.00:00:00") == timedelta(days=7)


class TestParseDurationInvalid:
    @pytest.mark.parametrize("text", ["", "abc", "7w", "-3d", "d7", "1.25:00:00", "00:61:00"])
    def test_rejected(self, text):
        with pytest.raises(DurationFormatError):
            parse_duration(text)

    def test_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_duration("soon")

    def test_is_value_error(self):
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration("soon")

    def test_non_string(self):
        with pytest.raises(DurationFormatError):
            parse_duration(7)  # type: ignore[arg-type]


class TestFormatDuration:
    def test_canonical(self):
        assert format_duration(timedelta(days=1, hours=2, minutes=3, seconds=4)) == "1.02:03:04"

    def test_parses_back(self):
        value = timedelta(days=3, minutes=5)
        assert parse_duration(format_duration(value)) == value


class TestParseSize:
    def test_mb(self):
        assert parse_size("10MB") == 10 * 1024 * 1024

    def test_kb(self):
        assert parse_size("512KB") == 512 * 1024

    def test_gb(self):
        assert parse_size("1GB") == 1024 * 1024 * 1024

    def test_tb(self):
        assert parse_size("2TB") == 2 * 1024**4

    def test_bytes(self):
        assert parse_size("100 B") == 100

    def test_case_insensitive(self):
        assert parse_size("10mb") == 10 * 1024 * 1024

    def test_invalid_format(self):
        with pytest.raises(SizeFormatError, match="Invalid size"):
            parse_size("10bytes")

    def test_empty_string(self):
        with pytest.raises(ValueError):
            parse_size("")
