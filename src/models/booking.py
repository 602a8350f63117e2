# File: src/models/booking.py

import datetime
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .common import minutes_to_time_str, parse_date, time_to_minutes
from .enums import BookingStatus
from .errors import InvalidIntervalError
from .interval import Interval

# Columns that may hold a participant id in booking rows
_PARTICIPANT_COLUMNS = ('user_id', 'player1_id', 'player2_id', 'creator_id')


@dataclass
class BookingRecord:
    """A match or calendar event occupying time for its participants."""
    user_ids: List[str]
    date: datetime.date
    start_time: str  # "HH:MM" format
    end_time: str    # "HH:MM" format, "24:00" allowed
    status: BookingStatus = BookingStatus.CONFIRMED
    id: Optional[str] = None
    title: Optional[str] = None

    def __post_init__(self):
        """Normalize types and reject malformed time ranges."""
        if not isinstance(self.date, datetime.date) or isinstance(self.date, datetime.datetime):
            self.date = parse_date(self.date)

        if isinstance(self.status, str):
            self.status = BookingStatus(self.status.lower())

        if isinstance(self.user_ids, str):
            self.user_ids = [self.user_ids]
        self.user_ids = [str(u) for u in self.user_ids]

        try:
            start = time_to_minutes(self.start_time)
            end = time_to_minutes(self.end_time)
        except ValueError as e:
            raise InvalidIntervalError(str(e)) from e

        if start >= end:
            raise InvalidIntervalError(
                f"Booking start must be before end: {self.start_time}-{self.end_time} on {self.date}"
            )
        self.start_time = minutes_to_time_str(start)
        self.end_time = minutes_to_time_str(end)

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)

    def involves(self, user_id: str) -> bool:
        return str(user_id) in self.user_ids

    def has_status(self, statuses: Iterable[Union[BookingStatus, str]]) -> bool:
        wanted = {s if isinstance(s, BookingStatus) else BookingStatus(s) for s in statuses}
        return self.status in wanted

    def to_interval(self, timezone: Union[str, datetime.tzinfo, None] = None) -> Interval:
        return Interval.on_date(self.date, self.start_minutes, self.end_minutes, timezone)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_ids': list(self.user_ids),
            'date': self.date.isoformat(),
            'start_time': self.start_time,
            'end_time': self.end_time,
            'status': self.status.value,
            'title': self.title,
        }


def booking_from_dict(data: dict) -> BookingRecord:
    """Create BookingRecord from a store row (match_bookings or event shape)."""
    user_ids = list(data.get('user_ids') or [])
    for column in _PARTICIPANT_COLUMNS:
        value = data.get(column)
        if value and str(value) not in user_ids:
            user_ids.append(str(value))

    if not user_ids:
        raise ValueError(f"Booking row has no participants: {data.get('id')}")

    record_id = data.get('id')
    return BookingRecord(
        id=str(record_id) if record_id is not None else None,
        user_ids=user_ids,
        date=data.get('match_date') or data['date'],
        start_time=str(data['start_time']),
        end_time=str(data['end_time']),
        status=data.get('status') or BookingStatus.CONFIRMED,
        title=data.get('title') or data.get('event_name'),
    )
