"""Tests for time utilities."""

from datetime import datetime, timedelta, timezone

from chatrelay.infra.time import local_hhmm, utc_iso, utc_now


class TestUtcNow:
    """Tests for utc_now()."""

    def test_returns_utc_datetime(self):
        now = utc_now()
        assert now.tzinfo == timezone.utc

    def test_returns_current_time(self):
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestUtcIso:
    def test_millisecond_precision_with_z(self):
        moment = datetime(2026, 10, 19, 12, 30, 5, 123456, tzinfo=timezone.utc)
        assert utc_iso(moment) == "2026-10-19T12:30:05.123Z"

    def test_converts_other_offsets_to_utc(self):
        moment = datetime(2026, 10, 19, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert utc_iso(moment) == "2026-10-19T12:00:00.000Z"


class TestLocalHhmm:
    def test_format(self):
        assert local_hhmm(datetime(2026, 1, 1, 7, 5)) == "07:05"
