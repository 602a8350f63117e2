# File: src/processors/busy_set_processor.py
"""
Busy-set processing module.
Turns a user's typed availability and booking records into intervals.
"""

from typing import Iterable, List, Optional

from src.models import (
    AvailabilityRecord,
    BookingRecord,
    EngineSettings,
    Interval,
    ParticipantBusySet,
    merge_intervals,
)
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class BusySetProcessor:
    """Derives busy and declared-free intervals for one user."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize busy-set processor.

        Args:
            settings: Engine settings (timezone, committed statuses)
        """
        self.settings = settings or EngineSettings()

    def committed_intervals(
        self,
        user_id: str,
        availability: Iterable[AvailabilityRecord],
        bookings: Iterable[BookingRecord],
        exclude_id: Optional[str] = None
    ) -> List[Interval]:
        """
        Union of the user's committed bookings and explicit blocks.

        Args:
            user_id: Whose commitments to collect
            availability: The user's availability records
            bookings: Bookings possibly involving the user
            exclude_id: Record id to ignore (the one being edited)

        Returns:
            Sorted, merged busy intervals
        """
        tz = self.settings.timezone
        busy: List[Interval] = []

        for record in availability:
            if record.user_id != str(user_id) or not record.is_blocked:
                continue
            if exclude_id is not None and record.id == exclude_id:
                continue
            busy.append(record.to_interval(tz))

        for booking in bookings:
            if not booking.involves(user_id):
                continue
            if not booking.has_status(self.settings.committed_statuses):
                continue
            if exclude_id is not None and booking.id == exclude_id:
                continue
            busy.append(booking.to_interval(tz))

        return merge_intervals(busy)

    def free_intervals(self, user_id: str, availability: Iterable[AvailabilityRecord]) -> List[Interval]:
        """Union of the user's declared, unblocked availability."""
        tz = self.settings.timezone
        return merge_intervals(
            record.to_interval(tz)
            for record in availability
            if record.user_id == str(user_id) and record.is_free
        )

    def build(
        self,
        user_id: str,
        name: str,
        availability: List[AvailabilityRecord],
        bookings: List[BookingRecord]
    ) -> ParticipantBusySet:
        """Build the ParticipantBusySet for one participant."""
        busy_set = ParticipantBusySet(
            user_id=str(user_id),
            name=name,
            busy_intervals=self.committed_intervals(user_id, availability, bookings),
            free_intervals=self.free_intervals(user_id, availability),
        )
        logger.debug(
            f"Busy set for {user_id}: {len(busy_set.busy_intervals)} busy, "
            f"{len(busy_set.free_intervals)} free intervals"
        )
        return busy_set
