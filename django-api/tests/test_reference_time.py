"""Tests for reference-day arithmetic and formatting helpers.

Run with: pytest tests/test_reference_time.py -v
"""

import time
from datetime import datetime, timedelta, timezone

import pytest

from orientation.domain.reference_time import (
    REFERENCE_TZ,
    end_of_reference_day,
    format_clock,
    format_date,
    format_duration,
    format_relative_date,
    format_time,
    format_time_slot,
    format_weekday_date_time,
    from_epoch_ms,
    parse_time_of_day,
    parse_time_slot,
    same_reference_day,
    start_of_reference_day,
    to_epoch_ms,
)
from tests.factories import pht

UTC = timezone.utc


class TestStartOfReferenceDay:
    """Tests for the day-boundary calculator."""

    def test_morning_in_pht(self):
        """An instant during the PHT day maps to that day's midnight."""
        assert start_of_reference_day(pht(2025, 1, 28, 8, 45)) == pht(2025, 1, 28)

    def test_utc_evening_is_next_pht_day(self):
        """17:00 UTC is 01:00 PHT the next calendar day."""
        instant = datetime(2025, 1, 27, 17, 0, tzinfo=UTC)
        assert start_of_reference_day(instant) == pht(2025, 1, 28)

    def test_last_minute_before_pht_midnight(self):
        """15:59 UTC is still the previous PHT day."""
        instant = datetime(2025, 1, 27, 15, 59, 59, tzinfo=UTC)
        assert start_of_reference_day(instant) == pht(2025, 1, 27)

    def test_result_is_in_reference_zone(self):
        """The result is expressed with the +08:00 offset."""
        result = start_of_reference_day(datetime(2025, 6, 1, 12, tzinfo=UTC))
        assert result.utcoffset() == timedelta(hours=8)
        assert (result.hour, result.minute, result.second, result.microsecond) == (0, 0, 0, 0)

    @pytest.mark.parametrize(
        "instant",
        [
            pht(2025, 1, 28),
            pht(2025, 1, 28, 23, 59, 59),
            datetime(2024, 2, 29, 16, 0, tzinfo=UTC),
            datetime(2025, 12, 31, 23, 30, tzinfo=UTC),
        ],
    )
    def test_idempotent(self, instant):
        """Applying the calculator twice gives the same day start."""
        once = start_of_reference_day(instant)
        assert start_of_reference_day(once) == once

    @pytest.mark.parametrize("offset_hours", [-11, -5, 0, 5.5, 8, 14])
    def test_independent_of_input_offset(self, offset_hours):
        """The same absolute instant gives the same day in any input zone."""
        instant = datetime(2025, 1, 27, 20, 30, tzinfo=UTC)
        shifted = instant.astimezone(timezone(timedelta(hours=offset_hours)))
        assert start_of_reference_day(shifted) == start_of_reference_day(instant)

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="requires time.tzset")
    @pytest.mark.parametrize("tz", ["America/New_York", "Pacific/Kiritimati", "UTC"])
    def test_independent_of_process_timezone(self, monkeypatch, tz):
        """Changing the host timezone does not move the day boundary."""
        instant = datetime(2025, 1, 27, 20, 30, tzinfo=UTC)
        expected = pht(2025, 1, 28)
        monkeypatch.setenv("TZ", tz)
        time.tzset()
        try:
            assert start_of_reference_day(instant) == expected
        finally:
            monkeypatch.undo()
            time.tzset()

    def test_rejects_naive_datetime(self):
        """Naive datetimes have no absolute meaning and are rejected."""
        with pytest.raises(ValueError):
            start_of_reference_day(datetime(2025, 1, 28, 9))

    def test_end_of_day(self):
        """End of day is one millisecond before the next midnight."""
        assert end_of_reference_day(pht(2025, 1, 28, 9)) == pht(2025, 1, 29) - timedelta(milliseconds=1)

    def test_same_reference_day(self):
        """Two instants either side of UTC midnight can share a PHT day."""
        a = datetime(2025, 1, 27, 23, 0, tzinfo=UTC)
        b = datetime(2025, 1, 28, 1, 0, tzinfo=UTC)
        assert same_reference_day(a, b)
        assert not same_reference_day(a, datetime(2025, 1, 27, 15, 0, tzinfo=UTC))


class TestEpochMillis:
    """Tests for epoch millisecond conversion."""

    def test_pht_midnight_in_epoch_ms(self):
        """2025-01-28 00:00 PHT is 2025-01-27 16:00 UTC."""
        assert to_epoch_ms(pht(2025, 1, 28)) == 1737993600000

    def test_from_epoch_ms_is_aware_utc(self):
        """Epoch values decode to aware UTC datetimes."""
        instant = from_epoch_ms(1737993600000)
        assert instant == pht(2025, 1, 28)
        assert instant.tzinfo is UTC


class TestParseTimeOfDay:
    """Tests for "h:mm AM/PM" parsing."""

    @pytest.mark.parametrize(
        "text,minutes",
        [
            ("9:30 AM", 570),
            ("12:00 PM", 720),
            ("12:15 AM", 15),
            ("11:59 PM", 1439),
            ("1:05 pm", 785),
            ("  8:00 AM ", 480),
        ],
    )
    def test_valid_times(self, text, minutes):
        """Valid 12-hour times convert to minutes since midnight."""
        assert parse_time_of_day(text) == minutes

    @pytest.mark.parametrize("text", ["", "9:30", "13:00 PM", "0:30 AM", "9:75 AM", "noon", "9.30 AM", None])
    def test_malformed_times(self, text):
        """Malformed times parse to None instead of raising."""
        assert parse_time_of_day(text) is None

    def test_time_slot(self):
        """A slot label parses into start and end minutes."""
        assert parse_time_slot("9:00 AM - 10:00 AM") == (540, 600)

    @pytest.mark.parametrize("text", ["9:00 AM", "10:00 AM - 9:00 AM", "9:00 AM - late", "9:00 AM-10:00 AM"])
    def test_malformed_time_slot(self, text):
        """Slots that are malformed or reversed parse to None."""
        assert parse_time_slot(text) is None


class TestFormatting:
    """Tests for display helpers."""

    @pytest.mark.parametrize(
        "minutes,text",
        [(0, "12:00 AM"), (570, "9:30 AM"), (720, "12:00 PM"), (785, "1:05 PM"), (1439, "11:59 PM")],
    )
    def test_format_clock(self, minutes, text):
        """Minutes render as a 12-hour clock."""
        assert format_clock(minutes) == text

    def test_format_time_slot(self):
        """A window renders as a slot label."""
        assert format_time_slot(540, 720) == "9:00 AM - 12:00 PM"

    def test_format_time_uses_reference_zone(self):
        """01:30 UTC renders as 9:30 AM PHT."""
        assert format_time(datetime(2025, 1, 28, 1, 30, tzinfo=UTC)) == "9:30 AM"

    def test_format_date_uses_reference_zone(self):
        """20:00 UTC on the 14th is already the 15th in PHT."""
        assert format_date(datetime(2025, 1, 14, 20, 0, tzinfo=UTC)) == "Jan 15, 2025"

    def test_relative_dates(self):
        """Today and yesterday get names; older days get a date."""
        now = pht(2025, 1, 28, 10)
        assert format_relative_date(pht(2025, 1, 28, 0, 5), now) == "Today"
        assert format_relative_date(pht(2025, 1, 27, 23, 59), now) == "Yesterday"
        assert format_relative_date(pht(2025, 1, 15, 9), now) == "Jan 15, 2025"

    def test_weekday_date_time(self):
        """Later-day starts render with weekday and month names."""
        assert format_weekday_date_time(pht(2025, 1, 29, 9)) == "Wednesday, January 29 at 9:00 AM"

    @pytest.mark.parametrize(
        "delta,text",
        [
            (timedelta(minutes=90), "1h 30m"),
            (timedelta(minutes=45), "45m"),
            (timedelta(minutes=45, seconds=59), "45m"),
            (timedelta(hours=1), "1h 0m"),
            (timedelta(0), "0m"),
        ],
    )
    def test_format_duration(self, delta, text):
        """Durations render in hours and minutes."""
        assert format_duration(delta) == text

    def test_reference_tz_is_fixed_offset(self):
        """The reference zone is a fixed +08:00 with no DST."""
        assert REFERENCE_TZ.utcoffset(None) == timedelta(hours=8)
