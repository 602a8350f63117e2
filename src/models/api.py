# File: src/models/api.py
"""
Request/response contracts for conflict checks and selection commits.
"""

import datetime
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .common import minutes_to_time_str, parse_date, time_to_minutes
from .errors import (
    InvalidIntervalError,
    RequestValidationError,
    SchedulingError,
    ValidationError,
)
from .interval import Interval


@dataclass
class ConflictCheckRequest:
    """{user_id, date, start_time, end_time} plus an optional record to ignore."""
    user_id: str
    date: datetime.date
    start_time: str
    end_time: str
    exclude_id: Optional[str] = None

    def to_interval(self, timezone: Union[str, datetime.tzinfo, None] = None) -> Interval:
        return Interval.on_date(
            self.date,
            time_to_minutes(self.start_time),
            time_to_minutes(self.end_time),
            timezone,
        )


def conflict_request_from_dict(data: dict) -> ConflictCheckRequest:
    """
    Build and validate a ConflictCheckRequest.

    Raises:
        RequestValidationError: on missing fields or an empty/inverted range
    """
    errors: List[ValidationError] = []
    for key in ('user_id', 'date', 'start_time', 'end_time'):
        if not data.get(key):
            errors.append(ValidationError(key, 'is required'))
    if errors:
        raise RequestValidationError(errors)

    try:
        day = parse_date(data['date'])
    except ValueError:
        raise RequestValidationError([ValidationError('date', f"not a YYYY-MM-DD date: {data['date']!r}")])

    try:
        start = time_to_minutes(data['start_time'])
        end = time_to_minutes(data['end_time'])
    except ValueError as e:
        raise RequestValidationError([ValidationError('start_time', str(e))])

    if start >= end:
        raise RequestValidationError([ValidationError('end_time', 'must be after start_time')])

    exclude_id = data.get('exclude_id')
    return ConflictCheckRequest(
        user_id=str(data['user_id']),
        date=day,
        start_time=minutes_to_time_str(start),
        end_time=minutes_to_time_str(end),
        exclude_id=str(exclude_id) if exclude_id else None,
    )


@dataclass
class ConflictCheckResult:
    """Outcome of a conflict check. A set error means the check failed closed."""
    has_conflict: bool
    conflicts: List[Interval] = field(default_factory=list)
    error: Optional[SchedulingError] = None

    @property
    def failed_closed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict:
        result = {'has_conflict': self.has_conflict}
        if self.error is not None:
            result['error'] = str(self.error)
        return result


@dataclass
class SelectionCommit:
    """UI -> booking-creation event produced by a completed drag selection."""
    date: datetime.date
    start_time: str
    end_time: str
    interval: Interval
    source_availability_id: Optional[str] = None

    def __post_init__(self):
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise InvalidIntervalError(f"Selection is empty: {self.start_time}-{self.end_time}")

    def to_dict(self) -> dict:
        result = {
            'date': self.date.isoformat(),
            'start_time': self.start_time,
            'end_time': self.end_time,
        }
        if self.source_availability_id is not None:
            result['source_availability_id'] = self.source_availability_id
        return result
