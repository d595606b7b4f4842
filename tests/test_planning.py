# ============================================================================
# tests/test_planning.py
# ============================================================================
"""
Tests for reading prescription frequency/duration text
"""

import pytest

from rx_companion.services.planning import bucket_for_time, daily_count, parse_days, suggest_times


class TestDailyCount:

    @pytest.mark.parametrize("text,expected", [
        ("3", 3),
        ("3회", 3),
        ("1일 3회", 3),
        ("하루 2회", 2),
        ("하루 1번", 1),
        ("2x", 2),
        ("3 times a day", 3),
        ("twice daily", 2),
        ("once daily", 1),
        ("BID", 2),
        ("t.i.d.", 3),
        ("1-0-1", 2),
        ("1-1-1-1", 4),
    ])
    def test_readable_frequencies(self, text, expected):
        assert daily_count(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "필요시", "as directed", "0", "12"])
    def test_unreadable_frequencies(self, text):
        assert daily_count(text) is None


class TestSuggestTimes:

    def test_three_times_a_day(self):
        assert suggest_times("1일 3회") == ["08:00", "13:00", "19:00"]

    def test_unknown_frequency_gets_no_fixed_reminders(self):
        assert suggest_times("필요시") == []

    @pytest.mark.parametrize("hhmm,bucket", [
        ("08:00", "MORNING"),
        ("13:00", "AFTERNOON"),
        ("19:00", "NIGHT"),
        ("garbage", "MORNING"),
    ])
    def test_bucket_for_time(self, hhmm, bucket):
        assert bucket_for_time(hhmm) == bucket


class TestParseDays:

    @pytest.mark.parametrize("text,expected", [
        ("7", 7),
        ("7일", 7),
        ("14 days", 14),
        ("", None),
        ("0", None),
        ("1000", None),
    ])
    def test_parse_days(self, text, expected):
        assert parse_days(text) == expected
