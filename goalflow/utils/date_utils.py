from datetime import datetime
from zoneinfo import ZoneInfo

from goalflow.config import settings


def get_timezone() -> ZoneInfo:
    """
    Returns the configured timezone used for schedules and log timestamps.
    """
    return ZoneInfo(settings.TIMEZONE)


def get_now() -> datetime:
    """
    Returns the current datetime in the configured timezone.
    """
    return datetime.now(get_timezone())


def ensure_aware(value: datetime) -> datetime:
    """
    Attaches the configured timezone to naive datetimes; aware values pass through.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=get_timezone())
    return value
