# File: src/core/selection.py
"""
Drag-to-select state machine over an occupancy grid.

Idle -> Selecting on a press over an available cell, Selecting -> Committed
on release, Selecting -> Idle when the pointer leaves the grid. The machine
only produces values; persisting a booking is the caller's job.
"""

from typing import List, Optional

from src.models import (
    GridCell,
    Interval,
    OccupancyGrid,
    SelectionCommit,
    SelectionPhase,
    SlotState,
)
from src.models.common import minutes_to_time_str
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class SelectionStateMachine:
    """Turns a stream of pointer events into one canonical interval."""

    def __init__(self, grid: OccupancyGrid, timezone: str = "UTC"):
        self.grid = grid
        self.timezone = timezone
        self.reset()

    def reset(self) -> None:
        """Back to Idle; called when the owning view is torn down."""
        self.phase = SelectionPhase.IDLE
        self.anchor: Optional[GridCell] = None
        self.current: Optional[GridCell] = None
        self.span: List[GridCell] = []
        self.last_commit: Optional[SelectionCommit] = None

    def is_eligible(self, cell: GridCell) -> bool:
        """Only available, unbooked cells can be selected."""
        found = self.grid.cell_at(cell)
        return found is not None and found.state == SlotState.AVAILABLE

    def press(self, cell: GridCell) -> bool:
        """Pointer down. Returns True if a selection started."""
        if self.phase == SelectionPhase.SELECTING:
            return False
        if not self.is_eligible(cell):
            logger.debug(f"Press on ineligible cell {cell}")
            return False

        self.phase = SelectionPhase.SELECTING
        self.anchor = cell
        self.current = cell
        self.span = [cell]
        self.last_commit = None
        return True

    def move(self, cell: GridCell) -> List[GridCell]:
        """Pointer moved onto `cell`; returns the current span."""
        if self.phase != SelectionPhase.SELECTING:
            return []
        # The anchor's date bounds the selection
        if cell.date != self.anchor.date:
            return list(self.span)

        self.current = cell
        self.span = self._contiguous_span(self.anchor, cell)
        return list(self.span)

    def leave(self) -> None:
        """Pointer left the grid without release: abandon the selection."""
        if self.phase == SelectionPhase.SELECTING:
            logger.debug("Selection abandoned")
            self.reset()

    def release(self) -> Optional[SelectionCommit]:
        """
        Pointer up. Emits a SelectionCommit for a non-empty span, otherwise
        returns to Idle without emitting anything.
        """
        if self.phase != SelectionPhase.SELECTING:
            return None

        span = [c for c in self.span if self.is_eligible(c)]
        if not span:
            self.reset()
            return None

        slot = self.grid.slot_minutes
        day = span[0].date
        start_minutes = span[0].start_minutes(slot)
        end_minutes = span[-1].end_minutes(slot)

        sources = {self.grid.cell_at(c).source_id for c in span}
        source_id = sources.pop() if len(sources) == 1 else None

        commit = SelectionCommit(
            date=day,
            start_time=minutes_to_time_str(start_minutes),
            end_time=minutes_to_time_str(end_minutes),
            interval=Interval.on_date(day, start_minutes, end_minutes, self.timezone),
            source_availability_id=source_id,
        )
        self.phase = SelectionPhase.COMMITTED
        self.span = span
        self.last_commit = commit
        logger.debug(f"Selection committed: {commit.to_dict()}")
        return commit

    def _contiguous_span(self, anchor: GridCell, target: GridCell) -> List[GridCell]:
        """Cells from anchor toward target, stopping before the first ineligible one."""
        step = 1 if target.index >= anchor.index else -1
        span: List[GridCell] = []
        for index in range(anchor.index, target.index + step, step):
            cell = GridCell(anchor.date, index)
            if not self.is_eligible(cell):
                break
            span.append(cell)
        return sorted(span, key=lambda c: c.index)
