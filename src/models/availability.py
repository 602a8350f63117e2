# File: src/models/availability.py

import datetime
from dataclasses import dataclass
from typing import Optional, Union

from .common import minutes_to_time_str, parse_date, time_to_minutes
from .enums import PrivacyLevel
from .errors import InvalidIntervalError
from .interval import Interval

_TRUE_STRINGS = ['yes', 'true', '1', 'y', 't']


@dataclass
class AvailabilityRecord:
    """A user's claim about free (or explicitly blocked) time on one date."""
    user_id: str
    date: datetime.date
    start_time: str  # "HH:MM" format
    end_time: str    # "HH:MM" format, "24:00" allowed
    is_available: bool = True
    is_blocked: bool = False
    privacy_level: PrivacyLevel = PrivacyLevel.PUBLIC
    id: Optional[str] = None

    def __post_init__(self):
        """Normalize types and reject malformed time ranges."""
        if not isinstance(self.date, datetime.date) or isinstance(self.date, datetime.datetime):
            self.date = parse_date(self.date)

        if isinstance(self.privacy_level, str):
            try:
                self.privacy_level = PrivacyLevel(self.privacy_level.lower())
            except ValueError:
                self.privacy_level = PrivacyLevel.PUBLIC

        try:
            start = time_to_minutes(self.start_time)
            end = time_to_minutes(self.end_time)
        except ValueError as e:
            raise InvalidIntervalError(str(e)) from e

        if start >= end:
            raise InvalidIntervalError(
                f"Availability start must be before end: {self.start_time}-{self.end_time} on {self.date}"
            )
        self.start_time = minutes_to_time_str(start)
        self.end_time = minutes_to_time_str(end)

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)

    @property
    def is_free(self) -> bool:
        """Declared free time: a block always wins over is_available."""
        return self.is_available and not self.is_blocked

    def to_interval(self, timezone: Union[str, datetime.tzinfo, None] = None) -> Interval:
        return Interval.on_date(self.date, self.start_minutes, self.end_minutes, timezone)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'date': self.date.isoformat(),
            'start_time': self.start_time,
            'end_time': self.end_time,
            'is_available': self.is_available,
            'is_blocked': self.is_blocked,
            'privacy_level': self.privacy_level.value,
        }


def _as_bool(value, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_STRINGS


def availability_from_dict(data: dict) -> AvailabilityRecord:
    """Create AvailabilityRecord from a store row."""
    record_id = data.get('id')
    return AvailabilityRecord(
        id=str(record_id) if record_id is not None else None,
        user_id=str(data['user_id']),
        date=data['date'],
        start_time=str(data['start_time']),
        end_time=str(data['end_time']),
        is_available=_as_bool(data.get('is_available'), True),
        is_blocked=_as_bool(data.get('is_blocked'), False),
        privacy_level=data.get('privacy_level') or PrivacyLevel.PUBLIC,
    )


def row_is_blocked(data: dict) -> bool:
    """Whether a raw store row marks its time as blocked."""
    return _as_bool(data.get('is_blocked'), False)
