# File: src/models/recurrence.py

import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from .common import parse_date
from .enums import PrivacyLevel, RecurrencePattern


@dataclass
class RecurrenceRule:
    """How an availability template repeats."""
    pattern: RecurrencePattern
    interval: int = 1  # e.g., every 2 weeks
    end_date: Optional[datetime.date] = None  # exclusive
    days_of_week: List[int] = field(default_factory=list)  # 0 = Sunday, weekly only

    def __post_init__(self):
        """Convert string pattern/date and validate interval."""
        if isinstance(self.pattern, str):
            self.pattern = RecurrencePattern(self.pattern.lower())
        if self.end_date is not None and not isinstance(self.end_date, datetime.date):
            self.end_date = parse_date(self.end_date)
        if self.interval < 1:
            raise ValueError(f"Recurrence interval must be at least 1: {self.interval}")
        if any(d < 0 or d > 6 for d in self.days_of_week):
            raise ValueError(f"days_of_week must be 0-6: {self.days_of_week}")
        self.days_of_week = sorted(set(self.days_of_week))

    def to_dict(self) -> dict:
        return {
            'pattern': self.pattern.value,
            'interval': self.interval,
            'endDate': self.end_date.isoformat() if self.end_date else None,
            'daysOfWeek': list(self.days_of_week),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RecurrenceRule':
        return cls(
            pattern=data.get('pattern', 'none'),
            interval=int(data.get('interval', 1)),
            end_date=data.get('endDate', data.get('end_date')),
            days_of_week=list(data.get('daysOfWeek', data.get('days_of_week')) or []),
        )


@dataclass
class AvailabilityTemplate:
    """The first occurrence of a repeating availability declaration."""
    user_id: str
    date: datetime.date
    start_time: str
    end_time: str
    privacy_level: PrivacyLevel = PrivacyLevel.PUBLIC
