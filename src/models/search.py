# File: src/models/search.py
"""
Data models for multi-participant common-availability search.
"""

import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from .common import parse_date
from .errors import InvalidIntervalError, RequestValidationError, ValidationError
from .interval import Interval, any_overlap, merge_intervals


@dataclass
class PreferredWindow:
    """Preferred search hours for one weekday (0 = Sunday ... 6 = Saturday)."""
    day_of_week: int
    start_hour: int
    end_hour: int

    def __post_init__(self):
        """Validate weekday and hour bounds."""
        self.day_of_week = int(self.day_of_week)
        self.start_hour = int(self.start_hour)
        self.end_hour = int(self.end_hour)
        if not 0 <= self.day_of_week <= 6:
            raise InvalidIntervalError(f"day_of_week must be 0-6: {self.day_of_week}")
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise InvalidIntervalError(
                f"Preferred window must satisfy 0 <= start < end <= 24: "
                f"{self.start_hour}-{self.end_hour}"
            )

    def to_dict(self) -> dict:
        return {
            'day_of_week': self.day_of_week,
            'start_hour': self.start_hour,
            'end_hour': self.end_hour,
        }


@dataclass
class SearchRequest:
    """Caller -> engine request for common free time."""
    participant_ids: List[str]
    start_date: datetime.date
    end_date: datetime.date
    duration_minutes: int
    preferred_times: List[PreferredWindow] = field(default_factory=list)
    requester_id: Optional[str] = None

    def __post_init__(self):
        """Normalize participants: requester first, duplicates dropped.

        Entries that are not non-empty strings are kept as-is so validate()
        can report them.
        """
        ordered: List = []
        if self.requester_id:
            ordered.append(str(self.requester_id))
        for pid in self.participant_ids:
            if isinstance(pid, str):
                pid = pid.strip()
            if pid not in ordered:
                ordered.append(pid)
        self.participant_ids = ordered

    def validate(self) -> List[ValidationError]:
        """Return every problem with this request (empty list means valid)."""
        errors: List[ValidationError] = []
        if not self.participant_ids:
            errors.append(ValidationError('participant_ids', 'at least one participant is required'))
        for i, pid in enumerate(self.participant_ids):
            if not isinstance(pid, str) or not pid:
                errors.append(ValidationError(
                    'participant_ids', f'not a user id: {pid!r}', entry_index=i
                ))
        if self.duration_minutes <= 0:
            errors.append(ValidationError('duration_minutes', 'must be positive'))
        if self.start_date > self.end_date:
            errors.append(ValidationError('end_date', 'must not be before start_date'))
        days = [w.day_of_week for w in self.preferred_times]
        if len(days) != len(set(days)):
            errors.append(ValidationError('preferred_times', 'duplicate day_of_week entries'))
        return errors

    def window_for(self, day_of_week: int) -> Optional[PreferredWindow]:
        for window in self.preferred_times:
            if window.day_of_week == day_of_week:
                return window
        return None

    def to_dict(self) -> dict:
        return {
            'participant_ids': list(self.participant_ids),
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'duration_minutes': self.duration_minutes,
            'preferred_times': [w.to_dict() for w in self.preferred_times],
        }


def search_request_from_dict(data: dict) -> SearchRequest:
    """
    Build a SearchRequest from its JSON shape.

    Raises:
        RequestValidationError: if any field is missing or malformed
    """
    errors: List[ValidationError] = []

    participants = data.get('participant_ids', data.get('participants', []))
    if isinstance(participants, str) or not isinstance(participants, (list, tuple)):
        errors.append(ValidationError('participant_ids', 'must be a list of ids'))
        participants = []

    dates = {}
    for key in ('start_date', 'end_date'):
        raw = data.get(key)
        if not raw:
            errors.append(ValidationError(key, 'is required'))
            continue
        try:
            dates[key] = parse_date(raw)
        except ValueError:
            errors.append(ValidationError(key, f'not a YYYY-MM-DD date: {raw!r}'))

    raw_duration = data.get('duration_minutes', data.get('desired_duration'))
    duration = 0
    if raw_duration is None:
        errors.append(ValidationError('duration_minutes', 'is required'))
    elif isinstance(raw_duration, bool):
        errors.append(ValidationError('duration_minutes', f'not an integer: {raw_duration!r}'))
    elif isinstance(raw_duration, int):
        duration = raw_duration
    elif isinstance(raw_duration, str) and raw_duration.strip().isdigit():
        duration = int(raw_duration)
    else:
        # 90.5 or "90.5" must not be truncated to 90
        errors.append(ValidationError('duration_minutes', f'not an integer: {raw_duration!r}'))

    windows: List[PreferredWindow] = []
    for i, raw_window in enumerate(data.get('preferred_times') or []):
        try:
            windows.append(PreferredWindow(
                day_of_week=raw_window['day_of_week'],
                start_hour=raw_window['start_hour'],
                end_hour=raw_window['end_hour'],
            ))
        except (KeyError, TypeError, ValueError) as e:
            errors.append(ValidationError('preferred_times', str(e), entry_index=i))

    if errors:
        raise RequestValidationError(errors)

    return SearchRequest(
        participant_ids=list(participants),
        start_date=dates['start_date'],
        end_date=dates['end_date'],
        duration_minutes=duration,
        preferred_times=windows,
        requester_id=data.get('requester_id'),
    )


@dataclass
class ParticipantBusySet:
    """One participant's busy (and declared free) time over a date range."""
    user_id: str
    name: str
    busy_intervals: List[Interval] = field(default_factory=list)
    free_intervals: List[Interval] = field(default_factory=list)

    def __post_init__(self):
        """Store unions so results never depend on fetch order."""
        self.busy_intervals = merge_intervals(self.busy_intervals)
        self.free_intervals = merge_intervals(self.free_intervals)

    def is_busy_during(self, candidate: Interval) -> bool:
        return any_overlap(candidate, self.busy_intervals)

    def has_declared(self, candidate: Interval) -> bool:
        """True if one declared free interval covers the whole candidate."""
        return any(free.contains_interval(candidate) for free in self.free_intervals)

    def is_free_for(self, candidate: Interval, require_declared: bool = True) -> bool:
        if self.is_busy_during(candidate):
            return False
        if require_declared and not self.has_declared(candidate):
            return False
        return True

    def to_dict(self) -> dict:
        return {
            'user_id': self.user_id,
            'user_name': self.name,
            'busy_blocks': [i.to_dict() for i in self.busy_intervals],
        }


@dataclass
class SuggestionSlot:
    """One candidate meeting time where every participant is free."""
    start: datetime.datetime
    end: datetime.datetime
    participants_available: List[str] = field(default_factory=list)

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)

    def to_dict(self) -> dict:
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'participants_available': list(self.participants_available),
        }


@dataclass
class SearchResponse:
    """Engine -> caller response; an empty list is a valid outcome."""
    suggestions: List[SuggestionSlot] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.suggestions:
            return f"Found {len(self.suggestions)} available time slots"
        return "No common availability found for all participants"

    def to_dict(self) -> dict:
        return {
            'suggestions': [s.to_dict() for s in self.suggestions],
            'message': self.message,
        }
