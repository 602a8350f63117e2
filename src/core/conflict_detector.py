# File: src/core/conflict_detector.py
"""
Conflict detection for a single user and a candidate interval.
Only concrete commitments (committed bookings, explicit blocks) conflict.
"""

import datetime
from typing import Callable, Dict, Iterable, List, Optional

from src.models import (
    ConflictCheckResult,
    Interval,
    ParticipantBusySet,
    SchedulingError,
    UpstreamFetchError,
    overlaps,
)
from src.models.common import to_zone
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

# (user_id, first_date, last_date, exclude_id) -> committed intervals
CommittedFetcher = Callable[[str, datetime.date, datetime.date, Optional[str]], List[Interval]]


class ConflictDetector:
    """Decides whether a candidate interval collides with a user's commitments."""

    def __init__(self, fetch_committed: CommittedFetcher, timezone: str = "UTC"):
        """
        Initialize conflict detector.

        Args:
            fetch_committed: Callable returning the user's committed intervals
                for a date range; raises SchedulingError when it cannot
            timezone: Zone used to decide which dates a candidate spans
        """
        self.fetch_committed = fetch_committed
        self.timezone = timezone

    @classmethod
    def from_busy_sets(cls, busy_sets: Iterable[ParticipantBusySet], timezone: str = "UTC") -> 'ConflictDetector':
        """Detector over pre-fetched busy sets; unknown users fail closed."""
        by_user: Dict[str, List[Interval]] = {b.user_id: list(b.busy_intervals) for b in busy_sets}

        def fetch(user_id, first_date, last_date, exclude_id=None):
            if user_id not in by_user:
                raise UpstreamFetchError({user_id: "no busy set was fetched for this user"})
            return by_user[user_id]

        return cls(fetch, timezone)

    def spanned_dates(self, candidate: Interval):
        """First and last calendar date touched by the candidate."""
        first = to_zone(candidate.start, self.timezone).date()
        last = to_zone(candidate.end - datetime.timedelta(microseconds=1), self.timezone).date()
        return first, last

    def check(self, user_id: str, candidate: Interval, exclude_id: Optional[str] = None) -> ConflictCheckResult:
        """
        Check a candidate against the user's committed intervals.

        If the commitments cannot be retrieved the result reports a conflict
        and carries the error.
        """
        first, last = self.spanned_dates(candidate)

        try:
            committed = self.fetch_committed(user_id, first, last, exclude_id)
        except SchedulingError as e:
            logger.warning(f"Could not load commitments for {user_id}, failing closed: {e}")
            error = e if isinstance(e, UpstreamFetchError) else UpstreamFetchError({user_id: str(e)})
            return ConflictCheckResult(has_conflict=True, error=error)

        conflicts = [busy for busy in committed if overlaps(candidate, busy)]
        if conflicts:
            logger.debug(
                f"Conflict for {user_id}: {candidate.start.isoformat()} overlaps "
                f"{len(conflicts)} commitment(s)"
            )
        return ConflictCheckResult(has_conflict=bool(conflicts), conflicts=sorted(conflicts))

    def has_conflict(self, user_id: str, candidate: Interval, exclude_id: Optional[str] = None) -> bool:
        return self.check(user_id, candidate, exclude_id).has_conflict
