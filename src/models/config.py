# File: src/models/config.py
"""
Data models for engine configuration.
"""

from dataclasses import dataclass
from typing import Tuple

from .enums import BookingStatus


@dataclass
class EngineSettings:
    """Tunables for grid building and search. Defaults mirror the calendar UI."""
    slot_minutes: int = 15
    display_start_hour: int = 6
    display_end_hour: int = 22
    search_start_hour: int = 6
    search_end_hour: int = 22
    search_step_minutes: int = 30
    max_suggestions: int = 10
    timezone: str = "UTC"
    require_declared_availability: bool = True
    max_fetch_workers: int = 8
    committed_statuses: Tuple[BookingStatus, ...] = (
        BookingStatus.ACCEPTED,
        BookingStatus.CONFIRMED,
    )
    grid_booking_statuses: Tuple[BookingStatus, ...] = (
        BookingStatus.PENDING,
        BookingStatus.ACCEPTED,
        BookingStatus.CONFIRMED,
    )

    def __post_init__(self):
        """Convert status strings and reject impossible values."""
        self.committed_statuses = tuple(
            s if isinstance(s, BookingStatus) else BookingStatus(s) for s in self.committed_statuses
        )
        self.grid_booking_statuses = tuple(
            s if isinstance(s, BookingStatus) else BookingStatus(s) for s in self.grid_booking_statuses
        )

        if self.slot_minutes <= 0 or 60 % self.slot_minutes:
            raise ValueError(f"slot_minutes must divide an hour: {self.slot_minutes}")
        for name in ('display', 'search'):
            start = getattr(self, f'{name}_start_hour')
            end = getattr(self, f'{name}_end_hour')
            if not 0 <= start < end <= 24:
                raise ValueError(f"{name} hours must satisfy 0 <= start < end <= 24: {start}-{end}")
        if self.search_step_minutes <= 0:
            raise ValueError(f"search_step_minutes must be positive: {self.search_step_minutes}")
        if self.max_suggestions <= 0:
            raise ValueError(f"max_suggestions must be positive: {self.max_suggestions}")
        if self.max_fetch_workers <= 0:
            raise ValueError(f"max_fetch_workers must be positive: {self.max_fetch_workers}")

    @classmethod
    def from_dict(cls, data: dict) -> 'EngineSettings':
        """Create EngineSettings from a dictionary (e.g., loaded from JSON)."""
        defaults = cls()
        return cls(
            slot_minutes=int(data.get('slot_minutes', defaults.slot_minutes)),
            display_start_hour=int(data.get('display_start_hour', defaults.display_start_hour)),
            display_end_hour=int(data.get('display_end_hour', defaults.display_end_hour)),
            search_start_hour=int(data.get('search_start_hour', defaults.search_start_hour)),
            search_end_hour=int(data.get('search_end_hour', defaults.search_end_hour)),
            search_step_minutes=int(data.get('search_step_minutes', defaults.search_step_minutes)),
            max_suggestions=int(data.get('max_suggestions', defaults.max_suggestions)),
            timezone=data.get('timezone', defaults.timezone),
            require_declared_availability=bool(
                data.get('require_declared_availability', defaults.require_declared_availability)
            ),
            max_fetch_workers=int(data.get('max_fetch_workers', defaults.max_fetch_workers)),
            committed_statuses=tuple(data.get('committed_statuses', defaults.committed_statuses)),
            grid_booking_statuses=tuple(data.get('grid_booking_statuses', defaults.grid_booking_statuses)),
        )

    def to_dict(self) -> dict:
        return {
            'slot_minutes': self.slot_minutes,
            'display_start_hour': self.display_start_hour,
            'display_end_hour': self.display_end_hour,
            'search_start_hour': self.search_start_hour,
            'search_end_hour': self.search_end_hour,
            'search_step_minutes': self.search_step_minutes,
            'max_suggestions': self.max_suggestions,
            'timezone': self.timezone,
            'require_declared_availability': self.require_declared_availability,
            'max_fetch_workers': self.max_fetch_workers,
            'committed_statuses': [s.value for s in self.committed_statuses],
            'grid_booking_statuses': [s.value for s in self.grid_booking_statuses],
        }
