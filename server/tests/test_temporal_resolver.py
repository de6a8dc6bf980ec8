"""Tests for the temporal resolver: relative days, weekdays, clock times, day parts."""
import pytest
from datetime import date, datetime, time, timedelta

from core.temporal_resolver import (
    parse_clock,
    resolve,
    resolve_date,
    resolve_datetime,
    resolve_time,
    strip_temporal_phrases,
)


# ---------------------------------------------------------------------------
# Relative days
# ---------------------------------------------------------------------------

class TestRelativeDays:
    @pytest.mark.parametrize("now", [
        datetime(2026, 10, 21, 10, 0),
        datetime(2026, 12, 31, 23, 30),
        datetime(2028, 2, 28, 8, 0),
        datetime(2026, 3, 1, 0, 0),
    ])
    def test_tomorrow_is_next_calendar_day(self, now):
        assert resolve("tomorrow", now).date == now.date() + timedelta(days=1)

    def test_today(self, now):
        assert resolve("finish it today", now).date == now.date()

    def test_day_after_tomorrow(self, now):
        assert resolve("day after tomorrow", now).date == now.date() + timedelta(days=2)

    def test_next_week(self, now):
        assert resolve("next week", now).date == now.date() + timedelta(days=7)

    def test_case_insensitive(self, now):
        assert resolve("TOMORROW", now).date == now.date() + timedelta(days=1)

    def test_no_match_inside_other_words(self, now):
        assert resolve_date("todays", now) is None

    def test_no_date_reference(self, now):
        assert resolve_date("buy milk", now) is None


# ---------------------------------------------------------------------------
# Weekdays
# ---------------------------------------------------------------------------

class TestWeekdays:
    def test_fixture_is_a_wednesday(self, now):
        assert now.weekday() == 2

    def test_plain_weekday_is_upcoming(self, now):
        assert resolve("saturday", now).date == date(2026, 10, 24)

    def test_this_saturday_is_within_six_days(self, now):
        result = resolve("this Saturday", now).date
        assert result == date(2026, 10, 24)
        assert 0 < (result - now.date()).days <= 6

    def test_next_saturday_skips_the_imminent_one(self, now):
        this_sat = resolve("this Saturday", now).date
        next_sat = resolve("next Saturday", now).date
        assert next_sat == date(2026, 10, 31)
        assert (next_sat - now.date()).days >= 7
        assert next_sat > this_sat

    def test_on_qualifier(self, now):
        assert resolve("on friday", now).date == date(2026, 10, 23)

    def test_same_weekday_means_next_week(self, now):
        assert resolve("wednesday", now).date == date(2026, 10, 28)

    def test_next_same_weekday_is_seven_days(self, now):
        assert resolve("next wednesday", now).date == date(2026, 10, 28)

    def test_earlier_weekday_wraps_forward(self, now):
        assert resolve("monday", now).date == date(2026, 10, 26)

    def test_next_monday_adds_a_week(self, now):
        assert resolve("next monday", now).date == date(2026, 11, 2)

    def test_relative_day_takes_priority_over_weekday(self, now):
        assert resolve("tomorrow not friday", now).date == date(2026, 10, 22)


# ---------------------------------------------------------------------------
# Clock times
# ---------------------------------------------------------------------------

class TestClockTimes:
    @pytest.mark.parametrize("text,expected", [
        ("6pm", time(18, 0)),
        ("12am", time(0, 0)),
        ("12pm", time(12, 0)),
        ("3:30pm", time(15, 30)),
        ("7:05 am", time(7, 5)),
        ("18:00", time(18, 0)),
        ("at 7", time(7, 0)),
        ("meet at 9:15", time(9, 15)),
        ("11 PM", time(23, 0)),
    ])
    def test_conversion(self, text, expected):
        assert parse_clock(text) == expected

    def test_bare_number_is_not_a_time(self):
        assert parse_clock("buy 2 apples") is None

    def test_three_digit_number_is_not_a_time(self):
        assert parse_clock("spent 450 on groceries") is None

    def test_invalid_hour_skipped(self):
        assert parse_clock("25:00") is None
        assert parse_clock("13pm") is None

    def test_invalid_minute_skipped(self):
        assert parse_clock("10:75") is None

    def test_first_valid_candidate_wins(self):
        assert parse_clock("13pm or 4pm") == time(16, 0)

    def test_resolved_through_resolve(self, now):
        assert resolve("6pm", now).time == time(18, 0)
        assert resolve("12am", now).time == time(0, 0)
        assert resolve("12pm", now).time == time(12, 0)


# ---------------------------------------------------------------------------
# Day parts
# ---------------------------------------------------------------------------

class TestDayParts:
    @pytest.mark.parametrize("text,expected", [
        ("tomorrow morning", time(9, 0)),
        ("this afternoon", time(12, 0)),
        ("at noon", time(12, 0)),
        ("this evening", time(18, 0)),
        ("tonight", time(21, 0)),
        ("at midnight", time(0, 0)),
    ])
    def test_day_part_times(self, text, expected):
        assert resolve_time(text) == expected

    def test_explicit_time_beats_day_part(self):
        assert resolve_time("tomorrow morning at 7:30") == time(7, 30)


# ---------------------------------------------------------------------------
# Elapsed times and combined resolution
# ---------------------------------------------------------------------------

class TestElapsedTime:
    def test_future_time_today(self, now):
        fragment = resolve("call at 6pm", now)
        assert fragment.date == now.date()
        assert fragment.time == time(18, 0)

    def test_elapsed_time_moves_to_tomorrow(self, now):
        fragment = resolve("call at 7", now)
        assert fragment.date == now.date() + timedelta(days=1)
        assert fragment.time == time(7, 0)

    def test_elapsed_time_with_explicit_date_stays(self, now):
        fragment = resolve("today at 7am", now)
        assert fragment.date == now.date()

    def test_elapsed_day_part_moves_to_tomorrow(self):
        evening = datetime(2026, 10, 21, 20, 0)
        fragment = resolve("this morning", evening)
        assert fragment.date == date(2026, 10, 22)

    def test_date_and_time_together(self, now):
        fragment = resolve("remind me tomorrow at 6pm", now)
        assert fragment.date == date(2026, 10, 22)
        assert fragment.time == time(18, 0)

    def test_nothing_resolved(self, now):
        fragment = resolve("buy milk", now)
        assert fragment.is_empty

    def test_empty_text(self, now):
        assert resolve("", now).is_empty


class TestResolveDatetime:
    def test_returns_now_when_nothing_matches(self, now):
        assert resolve_datetime("buy milk", now) == now

    def test_combines_date_and_time(self, now):
        assert resolve_datetime("tomorrow at 6pm", now) == datetime(2026, 10, 22, 18, 0)

    def test_date_only_keeps_current_time(self, now):
        assert resolve_datetime("next week", now) == datetime(2026, 10, 28, 10, 0)


# ---------------------------------------------------------------------------
# Phrase stripping
# ---------------------------------------------------------------------------

class TestStripTemporalPhrases:
    def test_strips_date_and_time(self):
        text, removed = strip_temporal_phrases("call mom tomorrow at 6pm")
        assert text == "call mom"
        assert removed is True

    def test_strips_weekday_with_qualifier(self):
        text, _ = strip_temporal_phrases("dentist next Saturday morning")
        assert text == "dentist"

    def test_nothing_to_strip(self):
        assert strip_temporal_phrases("buy milk") == ("buy milk", False)

    def test_midnight_stripped(self):
        assert strip_temporal_phrases("submit the form at midnight") == ("submit the form", True)
