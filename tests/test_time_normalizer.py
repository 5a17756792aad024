import pytest

from newest_check.checker.time_normalizer import (
    DAY_MS,
    parse_absolute_ms,
    resolve_timestamp_ms,
    to_seconds,
)

from conftest import NOW_MS


def test_absolute_wins_over_relative():
    resolved = resolve_timestamp_ms("2024-01-01T00:00:00Z", "3 hours ago", now_ms=NOW_MS + 999)
    assert resolved == 1_704_067_200_000


def test_listing_attribute_with_trailing_epoch():
    assert parse_absolute_ms("2024-01-01T00:00:00 1704067200") == 1_704_067_200_000


def test_naive_absolute_is_utc():
    assert parse_absolute_ms("2024-01-01T01:00:00") == 1_704_067_200_000 + 3_600_000


def test_malformed_absolute_falls_through_to_relative():
    assert resolve_timestamp_ms("not a date", "5 minutes ago", now_ms=NOW_MS) == NOW_MS - 300_000


def test_hours_ago():
    assert resolve_timestamp_ms(None, "2 hours ago", now_ms=NOW_MS) == NOW_MS - 7_200_000


def test_yesterday_is_case_insensitive():
    assert resolve_timestamp_ms(None, "Yesterday", now_ms=NOW_MS) == NOW_MS - 86_400_000


def test_yesterday_checked_before_pattern():
    assert resolve_timestamp_ms(None, "yesterday, 3 hours ago", now_ms=NOW_MS) == NOW_MS - DAY_MS


@pytest.mark.parametrize(
    "text, expected_ms",
    [
        ("1 second ago", 1_000),
        ("30 seconds ago", 30_000),
        ("1 minute ago", 60_000),
        ("1 day ago", DAY_MS),
        ("2 weeks ago", 14 * DAY_MS),
        ("1 month ago", 30 * DAY_MS),
        ("2 years ago", 730 * DAY_MS),
    ],
)
def test_unit_durations(text, expected_ms):
    assert resolve_timestamp_ms(None, text, now_ms=NOW_MS) == NOW_MS - expected_ms


@pytest.mark.parametrize("text", ["banana", "", None, "3 fortnights ago", "3 hours"])
def test_unresolved(text):
    assert resolve_timestamp_ms(None, text, now_ms=NOW_MS) is None


def test_clock_used_when_now_omitted():
    assert resolve_timestamp_ms(None, "1 minute ago", clock=lambda: NOW_MS) == NOW_MS - 60_000


def test_to_seconds_floors():
    assert to_seconds(1_999) == 1
    assert to_seconds(-1) == -1


def test_fractional_seconds_of_any_width():
    assert parse_absolute_ms("2024-01-01T00:00:00.5Z") == 1_704_067_200_500
