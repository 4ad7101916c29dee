from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from goalflow.beat_schedule import compute_next_run, describe_schedule, next_run_or_fallback

# Monday
NOW = datetime(2026, 1, 5, 10, 7, tzinfo=timezone.utc)


def test_hourly_runs_at_the_next_top_of_the_hour():
    assert compute_next_run("0 * * * *", NOW) == datetime(2026, 1, 5, 11, 0, tzinfo=timezone.utc)


def test_next_run_is_strictly_in_the_future():
    on_the_hour = datetime(2026, 1, 5, 11, 0, tzinfo=timezone.utc)
    assert compute_next_run("0 * * * *", on_the_hour) == datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)
    assert compute_next_run("* * * * *", NOW) > NOW


def test_daily_schedule_rolls_over_to_tomorrow():
    assert compute_next_run("0 9 * * *", NOW) == datetime(2026, 1, 6, 9, 0, tzinfo=timezone.utc)
    assert compute_next_run("0 9,18 * * *", NOW) == datetime(2026, 1, 5, 18, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("expr", ["0 9 * * 0", "0 9 * * 7", "0 9 * * sun"])
def test_day_of_week_zero_and_seven_mean_sunday(expr):
    assert compute_next_run(expr, NOW) == datetime(2026, 1, 11, 9, 0, tzinfo=timezone.utc)


def test_weekday_ranges_follow_cron_numbering():
    friday = datetime(2026, 1, 9, 10, 0, tzinfo=timezone.utc)
    assert compute_next_run("0 9 * * 1-5", friday) == datetime(2026, 1, 12, 9, 0, tzinfo=timezone.utc)
    assert compute_next_run("0 0 * * 1", NOW) == datetime(2026, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "expr, expected",
    [
        # first of the month or any Monday
        ("0 0 1 * 1", datetime(2026, 1, 12, 0, 0, tzinfo=timezone.utc)),
        ("0 0 6 * 5", datetime(2026, 1, 6, 0, 0, tzinfo=timezone.utc)),
        ("0 0 13 * 5", datetime(2026, 1, 9, 0, 0, tzinfo=timezone.utc)),
    ],
)
def test_restricted_day_and_weekday_fire_on_either(expr, expected):
    assert compute_next_run(expr, NOW) == expected


def test_starred_day_field_still_requires_both():
    assert compute_next_run("0 0 1 * *", NOW) == datetime(2026, 2, 1, 0, 0, tzinfo=timezone.utc)
    # days 1, 11, 21, 31 that are also Mondays
    assert compute_next_run("0 0 */10 * 1", NOW) == datetime(2026, 5, 11, 0, 0, tzinfo=timezone.utc)


def test_next_run_keeps_the_callers_timezone():
    tz = ZoneInfo("America/New_York")
    now = datetime(2026, 1, 5, 8, 0, tzinfo=tz)
    next_run = compute_next_run("0 9 * * *", now)
    assert next_run == datetime(2026, 1, 5, 9, 0, tzinfo=tz)
    assert next_run.utcoffset() == now.utcoffset()


@pytest.mark.parametrize("expr", ["", "not a cron", "0 * * *", "61 * * * *", "0 9 * * 8"])
def test_malformed_expressions_raise(expr):
    with pytest.raises(ValueError):
        compute_next_run(expr, NOW)


def test_fallback_retries_an_hour_later():
    next_run, valid = next_run_or_fallback("every tuesday", NOW)
    assert not valid
    assert next_run == NOW + timedelta(hours=1)


def test_fallback_passes_valid_expressions_through():
    assert next_run_or_fallback("0 * * * *", NOW) == (datetime(2026, 1, 5, 11, 0, tzinfo=timezone.utc), True)


def test_describe_schedule():
    assert describe_schedule("0 9 * * *") == "Daily at 9:00 AM"
    assert describe_schedule(" 0  *  * * * ") == "Every hour"
    assert describe_schedule("") == "Not scheduled"
    assert describe_schedule("15 3 * * 2") == "15 3 * * 2"
