# File: src/models/interval.py
"""
Half-open time interval [start, end) and the operations every
higher-level component builds on.
"""

import datetime
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .common import at_minutes
from .errors import InvalidIntervalError


@dataclass(frozen=True, order=True)
class Interval:
    """A non-empty half-open interval [start, end)."""
    start: datetime.datetime
    end: datetime.datetime

    def __post_init__(self):
        """Reject zero-length, inverted and mixed naive/aware intervals."""
        if not isinstance(self.start, datetime.datetime) or not isinstance(self.end, datetime.datetime):
            raise InvalidIntervalError("Interval bounds must be datetimes")
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise InvalidIntervalError("Interval bounds mix naive and aware datetimes")
        if self.start >= self.end:
            raise InvalidIntervalError(
                f"Interval start must be before end: {self.start.isoformat()} >= {self.end.isoformat()}"
            )

    @classmethod
    def on_date(
        cls,
        day: datetime.date,
        start_minutes: int,
        end_minutes: int,
        timezone: Union[str, datetime.tzinfo, None] = None
    ) -> 'Interval':
        """Build an interval from minutes-since-midnight on one calendar date."""
        if start_minutes >= end_minutes:
            raise InvalidIntervalError(
                f"Start must be before end on {day.isoformat()}: {start_minutes} >= {end_minutes}"
            )
        return cls(at_minutes(day, start_minutes, timezone), at_minutes(day, end_minutes, timezone))

    def duration_minutes(self) -> int:
        """Length of the interval in whole minutes."""
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps_with(self, other: 'Interval') -> bool:
        return overlaps(self, other)

    def contains_interval(self, other: 'Interval') -> bool:
        """True if `other` lies wholly inside this interval."""
        return self.start <= other.start and other.end <= self.end

    def to_dict(self) -> dict:
        return {'start': self.start.isoformat(), 'end': self.end.isoformat()}


def overlaps(a: Interval, b: Interval) -> bool:
    """Half-open overlap test; touching endpoints do not overlap."""
    return a.start < b.end and b.start < a.end


def contains(a: Interval, point: datetime.datetime) -> bool:
    """True if `point` falls in [a.start, a.end)."""
    return a.start <= point < a.end


def clip(a: Interval, window: Interval) -> Optional[Interval]:
    """Intersection of `a` with `window`, or None when they are disjoint."""
    if not overlaps(a, window):
        return None
    return Interval(max(a.start, window.start), min(a.end, window.end))


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """
    Sorted union of the given intervals.

    Overlapping and touching intervals are coalesced, so the result does
    not depend on input order.
    """
    merged: List[Interval] = []
    for interval in sorted(intervals):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            if interval.end > last.end:
                merged[-1] = Interval(last.start, interval.end)
        else:
            merged.append(interval)
    return merged


def any_overlap(candidate: Interval, intervals: Iterable[Interval]) -> bool:
    """True on the first interval that overlaps `candidate`."""
    return any(overlaps(candidate, other) for other in intervals)
