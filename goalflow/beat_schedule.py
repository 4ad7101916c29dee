"""
Cron evaluation for scheduled agents.
Standard 5-field expressions: minute hour day month day_of_week.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from apscheduler.triggers.cron import CronTrigger

from goalflow.config import settings
from goalflow.utils.date_utils import ensure_aware, get_timezone

logger = logging.getLogger(__name__)

# Cron counts days from Sunday (0 and 7); APScheduler counts from Monday.
_CRON_DAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat", "sun")

_DESCRIPTIONS = {
    "* * * * *": "Every minute",
    "*/5 * * * *": "Every 5 minutes",
    "*/15 * * * *": "Every 15 minutes",
    "*/30 * * * *": "Every 30 minutes",
    "0 * * * *": "Every hour",
    "0 9 * * *": "Daily at 9:00 AM",
    "0 9,18 * * *": "9 AM and 6 PM daily",
    "0 0 * * 1": "Weekly on Monday",
}


def _cron_day_of_week(field: str) -> str:
    """Rewrite numeric cron weekdays as names so APScheduler reads them the cron way."""
    if not any(ch.isdigit() for ch in field):
        return field

    days = []
    for part in field.split(","):
        span, _, step = part.partition("/")
        if span == "*":
            start, end = 0, 6
        elif "-" in span:
            first, last = span.split("-", 1)
            start, end = int(first), int(last)
        else:
            start = int(span)
            end = 6 if step else start
        if not 0 <= start <= end <= 7:
            raise ValueError(f"Invalid day-of-week field: {field}")
        for n in range(start, end + 1, int(step) if step else 1):
            if _CRON_DAYS[n] not in days:
                days.append(_CRON_DAYS[n])
    return ",".join(days)


def build_triggers(expr: str, timezone=None) -> List[CronTrigger]:
    """
    One CronTrigger per day field that can fire ``expr``.

    Cron fires on either day field once both are restricted, while
    CronTrigger needs both to match, so that case splits in two.
    """
    parts = (expr or "").split()
    if len(parts) != 5:
        raise ValueError(f"Invalid cron expression: {expr!r}")

    minute, hour, day, month, day_of_week = parts
    day_of_week = _cron_day_of_week(day_of_week)
    if day.startswith("*") or day_of_week.startswith("*"):
        day_fields = [(day, day_of_week)]
    else:
        day_fields = [(day, "*"), ("*", day_of_week)]

    return [
        CronTrigger(
            minute=minute,
            hour=hour,
            day=dom,
            month=month,
            day_of_week=dow,
            timezone=timezone or get_timezone(),
        )
        for dom, dow in day_fields
    ]


def compute_next_run(expr: str, now: datetime) -> datetime:
    """
    Next occurrence of ``expr`` strictly after ``now``.

    Raises ValueError for malformed expressions or ones that never fire.
    """
    now = ensure_aware(now)
    # get_next_fire_time may return ``now`` itself when it matches
    after = now + timedelta(microseconds=1)
    fire_times = []
    for trigger in build_triggers(expr, now.tzinfo):
        fire_time = trigger.get_next_fire_time(None, after)
        if fire_time is not None:
            fire_times.append(fire_time)
    if not fire_times:
        raise ValueError(f"Cron expression never fires: {expr!r}")
    return min(fire_times).astimezone(now.tzinfo)


def next_run_or_fallback(expr: str, now: datetime, fallback_seconds: Optional[int] = None) -> Tuple[datetime, bool]:
    """Like compute_next_run, but a bad expression yields ``now + fallback`` and False."""
    if fallback_seconds is None:
        fallback_seconds = settings.INVALID_SCHEDULE_FALLBACK_SECONDS
    try:
        return compute_next_run(expr, now), True
    except ValueError as e:
        logger.warning(f"⚠️ {e}. Retrying in {fallback_seconds}s")
        return ensure_aware(now) + timedelta(seconds=fallback_seconds), False


def describe_schedule(expr: Optional[str]) -> str:
    if not expr:
        return "Not scheduled"
    return _DESCRIPTIONS.get(" ".join(expr.split()), expr)
