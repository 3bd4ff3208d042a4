"""
Tests for hisaab.time — Clock protocol implementations.
"""

from datetime import datetime, timedelta, timezone

import pytest

from hisaab.time import Clock, FixedClock, SystemClock


class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc

    def test_time_advances(self):
        clock = SystemClock()
        t1 = clock.now_utc()
        t2 = clock.now_utc()
        assert t2 >= t1


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))

    def test_advance(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        clock.advance(60)
        assert clock.now_utc() == fixed + timedelta(seconds=60)


def test_implementations_satisfy_protocol():
    def read(clock: Clock) -> datetime:
        return clock.now_utc()

    fixed = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert read(FixedClock(fixed)) == fixed
    assert read(SystemClock()).year >= 2025
