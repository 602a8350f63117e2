# File: src/models/common.py

import datetime
from typing import Union

import pytz

MINUTES_PER_DAY = 24 * 60


def parse_date(value: Union[str, datetime.date]) -> datetime.date:
    """Accept a date, a datetime or a 'YYYY-MM-DD' string (time part ignored)."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    if 'T' in text:
        text = text.split('T')[0]
    return datetime.datetime.strptime(text, "%Y-%m-%d").date()


def time_to_minutes(value: Union[str, datetime.time]) -> int:
    """
    Convert 'HH:MM' / 'HH:MM:SS' (or a time) to minutes since midnight.

    '24:00' is accepted as end-of-day. Seconds are truncated.
    """
    if isinstance(value, datetime.time):
        return value.hour * 60 + value.minute
    parts = str(value).strip().split(':')
    if not parts or not parts[0]:
        raise ValueError(f"Invalid time of day: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    if minutes < 0 or minutes > 59 or hours < 0:
        raise ValueError(f"Invalid time of day: {value!r}")
    total = hours * 60 + minutes
    if total > MINUTES_PER_DAY:
        raise ValueError(f"Time of day past midnight: {value!r}")
    return total


def minutes_to_time_str(minutes: int, with_seconds: bool = False) -> str:
    """Format minutes since midnight as 'HH:MM' (or 'HH:MM:SS')."""
    hours, mins = divmod(minutes, 60)
    if with_seconds:
        return f"{hours:02d}:{mins:02d}:00"
    return f"{hours:02d}:{mins:02d}"


def get_timezone(zone: Union[str, datetime.tzinfo, None]) -> datetime.tzinfo:
    """Resolve a zone identifier; None means UTC."""
    if zone is None:
        return pytz.UTC
    if isinstance(zone, datetime.tzinfo):
        return zone
    return pytz.timezone(zone)


def localize(naive: datetime.datetime, zone: Union[str, datetime.tzinfo, None]) -> datetime.datetime:
    """Attach a zone to a naive wall-clock datetime (pytz-aware)."""
    tz = get_timezone(zone)
    if hasattr(tz, 'localize'):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def at_minutes(day: datetime.date, minutes: int, zone: Union[str, datetime.tzinfo, None]) -> datetime.datetime:
    """Wall-clock instant `minutes` after midnight on `day` in `zone`."""
    if minutes >= MINUTES_PER_DAY:
        day = day + datetime.timedelta(days=minutes // MINUTES_PER_DAY)
        minutes = minutes % MINUTES_PER_DAY
    hours, mins = divmod(minutes, 60)
    return localize(datetime.datetime.combine(day, datetime.time(hours, mins)), zone)


def wall_clock_exists(day: datetime.date, minutes: int, zone: Union[str, datetime.tzinfo, None]) -> bool:
    """False for wall-clock times skipped by a forward DST transition in `zone`."""
    moment = at_minutes(day, minutes, zone)
    return to_zone(moment, zone).replace(tzinfo=None) == moment.replace(tzinfo=None)


def to_zone(moment: datetime.datetime, zone: Union[str, datetime.tzinfo, None]) -> datetime.datetime:
    """Convert an aware datetime to `zone`; naive values are taken as wall-clock in `zone`."""
    if moment.tzinfo is None:
        return localize(moment, zone)
    tz = get_timezone(zone)
    converted = moment.astimezone(tz)
    if hasattr(tz, 'normalize'):
        converted = tz.normalize(converted)
    return converted


def date_range(start: datetime.date, end: datetime.date):
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += datetime.timedelta(days=1)


def js_day_of_week(day: datetime.date) -> int:
    """Weekday number with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % 7
