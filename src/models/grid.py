# File: src/models/grid.py
"""
Derived, never-persisted occupancy grid for one user.
"""

import datetime
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .common import minutes_to_time_str
from .enums import SlotState


@dataclass(frozen=True)
class GridCell:
    """Position of one cell: a date and its slot index since midnight."""
    date: datetime.date
    index: int  # minutes // slot_minutes

    def start_minutes(self, slot_minutes: int = 15) -> int:
        return self.index * slot_minutes

    def end_minutes(self, slot_minutes: int = 15) -> int:
        return (self.index + 1) * slot_minutes


@dataclass
class OccupancyCell:
    """A 15-minute slice of an hour with its resolved state."""
    date: datetime.date
    hour: int
    quarter: int  # 0-3 for 15-minute slots
    state: SlotState = SlotState.UNAVAILABLE
    source_id: Optional[str] = None  # record that produced the state

    @property
    def is_available(self) -> bool:
        return self.state == SlotState.AVAILABLE

    @property
    def is_booked(self) -> bool:
        return self.state == SlotState.BOOKED

    def to_dict(self) -> dict:
        return {
            'hour': self.hour,
            'quarter': self.quarter,
            'state': self.state.value,
            'source_id': self.source_id,
        }


@dataclass
class OccupancyGrid:
    """Cells for every date in range and every hour in the display window."""
    user_id: str
    start_date: datetime.date
    end_date: datetime.date
    start_hour: int = 6
    end_hour: int = 22
    slot_minutes: int = 15
    days: Dict[datetime.date, List[OccupancyCell]] = field(default_factory=dict)

    @property
    def cells_per_hour(self) -> int:
        return 60 // self.slot_minutes

    def _offset(self, day: datetime.date, index: int) -> Optional[int]:
        if day not in self.days:
            return None
        offset = index - self.start_hour * self.cells_per_hour
        if offset < 0 or offset >= len(self.days[day]):
            return None
        return offset

    def cell(self, day: datetime.date, index: int) -> Optional[OccupancyCell]:
        """Cell by slot index since midnight, or None outside the grid."""
        offset = self._offset(day, index)
        if offset is None:
            return None
        return self.days[day][offset]

    def cell_at(self, position: GridCell) -> Optional[OccupancyCell]:
        return self.cell(position.date, position.index)

    def state_at(self, day: datetime.date, minutes: int) -> SlotState:
        """State of the cell containing `minutes`; outside the grid is unavailable."""
        found = self.cell(day, minutes // self.slot_minutes)
        return found.state if found else SlotState.UNAVAILABLE

    def cells_for(self, day: datetime.date, hour: int) -> List[OccupancyCell]:
        """The cells of one hour on one date (empty outside the window)."""
        first = self._offset(day, hour * self.cells_per_hour)
        if first is None:
            return []
        return self.days[day][first:first + self.cells_per_hour]

    def is_hour_available(self, day: datetime.date, hour: int) -> bool:
        return any(c.is_available for c in self.cells_for(day, hour))

    def is_hour_booked(self, day: datetime.date, hour: int) -> bool:
        return any(c.is_booked for c in self.cells_for(day, hour))

    def iter_cells(self) -> Iterator[OccupancyCell]:
        for day in sorted(self.days):
            yield from self.days[day]

    def count(self, state: SlotState) -> int:
        return sum(1 for c in self.iter_cells() if c.state == state)

    def to_dict(self) -> dict:
        """Serialize as {date: {"HH:00": [state, ...]}} for display layers."""
        days = {}
        for day in sorted(self.days):
            hours = {}
            for hour in range(self.start_hour, self.end_hour):
                hours[minutes_to_time_str(hour * 60)] = [
                    c.state.value for c in self.cells_for(day, hour)
                ]
            days[day.isoformat()] = hours
        return {
            'user_id': self.user_id,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'slot_minutes': self.slot_minutes,
            'days': days,
        }
