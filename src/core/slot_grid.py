# File: src/core/slot_grid.py
"""
Slot grid builder.
Turns one user's availability and booking records into a fixed-granularity
occupancy grid over a date range.
"""

import datetime
from typing import Iterable, List, Optional

from src.models import (
    AvailabilityRecord,
    BookingRecord,
    EngineSettings,
    OccupancyCell,
    OccupancyGrid,
    SlotState,
)
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class SlotGridBuilder:
    """
    Builds OccupancyGrid values.

    Availability is written first and bookings are overlaid afterwards, so
    a cell touched by a booking always ends up BOOKED.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize grid builder.

        Args:
            settings: Engine settings (display window, slot size, statuses)
        """
        self.settings = settings or EngineSettings()

    def build(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date,
        availability: Iterable[AvailabilityRecord],
        bookings: Iterable[BookingRecord] = ()
    ) -> OccupancyGrid:
        """
        Build the grid for one user.

        Args:
            user_id: Owner of the grid
            start_date: First date (inclusive)
            end_date: Last date (inclusive)
            availability: The user's availability records
            bookings: Bookings the user takes part in

        Returns:
            OccupancyGrid with every cell resolved
        """
        if start_date > end_date:
            raise ValueError(f"start_date {start_date} is after end_date {end_date}")

        grid = self._empty_grid(user_id, start_date, end_date)

        # Sorted so that source ids do not depend on fetch order
        declared = sorted(
            (r for r in availability if self._in_scope(r.user_id == str(user_id), r.date, grid)),
            key=lambda r: (r.date, r.start_minutes, r.end_minutes, r.id or ''),
        )
        available_count = 0
        for record in declared:
            if not record.is_free:
                continue
            self._mark(grid, record.date, record.start_minutes, record.end_minutes,
                       SlotState.AVAILABLE, record.id)
            available_count += 1

        overlaid = sorted(
            (b for b in bookings
             if self._in_scope(b.involves(user_id), b.date, grid)
             and b.has_status(self.settings.grid_booking_statuses)),
            key=lambda b: (b.date, b.start_minutes, b.end_minutes, b.id or ''),
        )
        for booking in overlaid:
            self._mark(grid, booking.date, booking.start_minutes, booking.end_minutes,
                       SlotState.BOOKED, booking.id)

        logger.debug(
            f"Built grid for {user_id} {start_date}..{end_date}: "
            f"{available_count} availability records, {len(overlaid)} bookings"
        )
        return grid

    def _empty_grid(self, user_id: str, start_date: datetime.date, end_date: datetime.date) -> OccupancyGrid:
        s = self.settings
        cells_per_hour = 60 // s.slot_minutes
        grid = OccupancyGrid(
            user_id=str(user_id),
            start_date=start_date,
            end_date=end_date,
            start_hour=s.display_start_hour,
            end_hour=s.display_end_hour,
            slot_minutes=s.slot_minutes,
        )
        day = start_date
        while day <= end_date:
            grid.days[day] = [
                OccupancyCell(date=day, hour=hour, quarter=q)
                for hour in range(s.display_start_hour, s.display_end_hour)
                for q in range(cells_per_hour)
            ]
            day += datetime.timedelta(days=1)
        return grid

    @staticmethod
    def _in_scope(owned: bool, day: datetime.date, grid: OccupancyGrid) -> bool:
        return owned and grid.start_date <= day <= grid.end_date

    def _mark(
        self,
        grid: OccupancyGrid,
        day: datetime.date,
        start_minutes: int,
        end_minutes: int,
        state: SlotState,
        source_id: Optional[str]
    ) -> None:
        """Raise every cell intersecting [start, end) to at least `state`."""
        slot = self.settings.slot_minutes
        first = start_minutes // slot
        # Half-open: a range ending on a boundary stops in the previous cell
        last = (end_minutes - 1) // slot

        window_first = grid.start_hour * grid.cells_per_hour
        window_last = grid.end_hour * grid.cells_per_hour - 1
        first = max(first, window_first)
        last = min(last, window_last)

        cells: List[OccupancyCell] = grid.days[day]
        for index in range(first, last + 1):
            cell = cells[index - window_first]
            if state.rank >= cell.state.rank:
                if state.rank > cell.state.rank or cell.source_id is None:
                    cell.source_id = source_id
                cell.state = state
