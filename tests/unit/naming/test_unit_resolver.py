# tests/unit/naming/test_unit_resolver.py — v1
"""Tests for naming/resolver.py — concrete paths and append decisions."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from logwarden.core.errors import LogPathError
from logwarden.core.models import NamingStrategy
from logwarden.naming.resolver import (
    purge_pattern_for,
    resolve,
    split_base_path,
    timestamp_suffix,
    weekday_suffix,
)


class TestSuffixes:
    def test_weekday(self):
        assert weekday_suffix(datetime(2024, 5, 13)) == "Monday"
        assert weekday_suffix(datetime(2024, 5, 19)) == "Sunday"

    def test_seven_distinct_weekdays(self):
        start = datetime(2024, 5, 13)
        names = {weekday_suffix(start + timedelta(days=i)) for i in range(14)}
        assert len(names) == 7

    def test_timestamp(self):
        assert timestamp_suffix(datetime(2013, 1, 1, 0, 0, 0)) == "01012013000000"
        assert timestamp_suffix(datetime(2024, 12, 31, 23, 59, 58)) == "12312024235958"


class TestSplitBasePath:
    def test_with_extension(self):
        assert split_base_path(Path("logs/App.log")) == (Path("logs"), "App", ".log")

    def test_without_extension(self):
        assert split_base_path(Path("logs/App")) == (Path("logs"), "App", "")

    def test_purge_pattern(self):
        assert purge_pattern_for(Path("logs/MyLog.log")) == "MyLog*.log"


class TestStandard:
    def test_verbatim_overwrite_by_default(self, log_dir, fixed_now):
        r = resolve(log_dir / "App.log", NamingStrategy.STANDARD, fixed_now)
        assert r.path == log_dir / "App.log"
        assert r.should_append is False
        assert r.purge_pattern is None

    def test_append_passed_through(self, log_dir, fixed_now):
        r = resolve(log_dir / "App.log", "standard", fixed_now, append=True)
        assert r.should_append is True


class TestCircular:
    def test_name(self, log_dir, fixed_now):
        r = resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now)
        assert r.path == log_dir / "App_Wednesday.log"

    def test_missing_file_appends(self, log_dir, fixed_now):
        r = resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now)
        assert r.should_append is True

    def test_recent_file_appends(self, log_dir, fixed_now, make_log_file):
        make_log_file(log_dir / "App_Wednesday.log", fixed_now, timedelta(hours=23))
        r = resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now)
        assert r.should_append is True

    def test_file_one_day_old_truncates(self, log_dir, fixed_now, make_log_file):
        make_log_file(log_dir / "App_Wednesday.log", fixed_now, timedelta(days=1))
        r = resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now)
        assert r.should_append is False

    def test_last_week_file_truncates(self, log_dir, fixed_now, make_log_file):
        make_log_file(log_dir / "App_Wednesday.log", fixed_now, timedelta(days=7))
        r = resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now)
        assert r.should_append is False

    def test_caller_append_ignored(self, log_dir, fixed_now, make_log_file):
        make_log_file(log_dir / "App_Wednesday.log", fixed_now, timedelta(days=7))
        r = resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now, append=True)
        assert r.should_append is False


class TestDateStamped:
    def test_exact_suffix(self, log_dir):
        r = resolve(log_dir / "MyLog.log", NamingStrategy.DATE_STAMPED, datetime(2013, 1, 1))
        assert r.path.name == "MyLog_01012013000000.log"

    def test_fresh_file_and_pattern(self, log_dir, fixed_now):
        r = resolve(log_dir / "MyLog.log", NamingStrategy.DATE_STAMPED, fixed_now, append=True)
        assert r.should_append is False
        assert r.purge_pattern == "MyLog*.log"

    def test_same_second_collides(self, log_dir, fixed_now):
        first = resolve(log_dir / "MyLog.log", NamingStrategy.DATE_STAMPED, fixed_now)
        second = resolve(
            log_dir / "MyLog.log", NamingStrategy.DATE_STAMPED,
            fixed_now + timedelta(milliseconds=400),
        )
        assert first.path == second.path


class TestValidationAndSideEffects:
    def test_directory_collision(self, log_dir, fixed_now):
        with pytest.raises(LogPathError, match="directory"):
            resolve(log_dir, NamingStrategy.STANDARD, fixed_now)

    def test_directory_collision_creates_nothing(self, tmp_path, fixed_now):
        target = tmp_path / "existing"
        target.mkdir()
        before = sorted(tmp_path.rglob("*"))
        with pytest.raises(LogPathError):
            resolve(target, NamingStrategy.DATE_STAMPED, fixed_now)
        assert sorted(tmp_path.rglob("*")) == before

    def test_resolved_path_is_directory(self, log_dir, fixed_now):
        (log_dir / "App_Wednesday.log").mkdir()
        with pytest.raises(LogPathError):
            resolve(log_dir / "App.log", NamingStrategy.CIRCULAR, fixed_now)

    def test_creates_parent_dirs(self, tmp_path, fixed_now):
        resolve(tmp_path / "a" / "b" / "App.log", NamingStrategy.STANDARD, fixed_now)
        assert (tmp_path / "a" / "b").is_dir()

    def test_idempotent_directory_creation(self, log_dir, fixed_now):
        resolve(log_dir / "App.log", NamingStrategy.STANDARD, fixed_now)
        resolve(log_dir / "App.log", NamingStrategy.STANDARD, fixed_now)
        assert log_dir.is_dir()

    def test_does_not_create_file(self, log_dir, fixed_now):
        r = resolve(log_dir / "App.log", NamingStrategy.STANDARD, fixed_now)
        assert not r.path.exists()
