# File: src/services/data_collector.py

import concurrent.futures
import datetime
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from src.models import (
    AvailabilityRecord,
    BookingRecord,
    BookingStatus,
    EngineSettings,
    Interval,
    ParticipantBusySet,
    StoreError,
    UpstreamFetchError,
    availability_from_dict,
    booking_from_dict,
    row_is_blocked,
)
from src.processors.busy_set_processor import BusySetProcessor
from src.services.availability_service import AvailabilityService
from src.services.booking_service import BookingService
from src.services.profile_service import UNKNOWN_USER, ProfileService
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar('T')


@dataclass
class UserRecords:
    """Typed store records for one user over a date range."""
    user_id: str
    name: str = UNKNOWN_USER
    availability: List[AvailabilityRecord] = field(default_factory=list)
    bookings: List[BookingRecord] = field(default_factory=list)


def _convert_rows(
    rows: List[dict],
    factory: Callable[[dict], T],
    kind: str,
    is_busy: Optional[Callable[[dict], bool]] = None
) -> List[T]:
    """
    Convert raw rows, logging and skipping the malformed ones.

    A malformed row that `is_busy` flags raises StoreError instead, so
    busy time is never lost.
    """
    records: List[T] = []
    for row in rows:
        try:
            records.append(factory(row))
        except (KeyError, TypeError, ValueError) as e:
            row_id = row.get('id', 'Unknown')
            if is_busy is not None and is_busy(row):
                raise StoreError(f"Malformed {kind} row {row_id}: {e}") from e
            logger.error(f"Failed to convert {kind} row {row_id}: {e}")
    return records


class DataCollector:
    """Collects store data for the engine and converts it to typed models."""

    def __init__(
        self,
        availability_service: AvailabilityService,
        booking_service: BookingService,
        profile_service: ProfileService,
        settings: Optional[EngineSettings] = None
    ):
        """
        Initialize data collector with services.

        Args:
            availability_service: Reads user_availability rows
            booking_service: Reads match_bookings rows
            profile_service: Resolves display names
            settings: Engine settings (statuses, timezone, worker bound)
        """
        self.availability = availability_service
        self.bookings = booking_service
        self.profiles = profile_service
        self.settings = settings or EngineSettings()
        self.processor = BusySetProcessor(self.settings)
        self.logger = setup_logger(__name__)

    def _display_name(self, user_id: str) -> str:
        # A missing name never blocks scheduling
        try:
            return self.profiles.get_display_name(user_id)
        except StoreError as e:
            self.logger.warning(f"Could not load profile for {user_id}: {e}")
            return UNKNOWN_USER

    def collect_user_records(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date,
        statuses: Optional[Iterable[BookingStatus]] = None,
        include_name: bool = False,
        strict: bool = False
    ) -> UserRecords:
        """
        Fetch and convert one user's availability and bookings.

        Args:
            user_id: The user
            start_date: First date (inclusive)
            end_date: Last date (inclusive)
            statuses: Booking statuses to fetch (defaults to committed statuses)
            include_name: Also resolve the display name
            strict: Fail on malformed booking or blocked rows instead of skipping them

        Raises:
            StoreError: if availability or bookings cannot be fetched, or a
                busy row is malformed in strict mode
        """
        statuses = tuple(statuses or self.settings.committed_statuses)

        availability = _convert_rows(
            self.availability.get_availability(user_id, start_date, end_date),
            availability_from_dict,
            'availability',
            is_busy=row_is_blocked if strict else None
        )
        bookings = _convert_rows(
            self.bookings.get_bookings(user_id, start_date, end_date, statuses),
            booking_from_dict,
            'booking',
            is_busy=(lambda row: True) if strict else None
        )

        return UserRecords(
            user_id=str(user_id),
            name=self._display_name(user_id) if include_name else UNKNOWN_USER,
            availability=availability,
            bookings=bookings,
        )

    def collect_committed_intervals(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date,
        exclude_id: Optional[str] = None
    ) -> List[Interval]:
        """
        Committed busy intervals for one user; usable as a ConflictDetector fetcher.

        Raises:
            UpstreamFetchError: if the store cannot be read or returns a malformed busy row
        """
        try:
            records = self.collect_user_records(user_id, start_date, end_date, strict=True)
        except StoreError as e:
            raise UpstreamFetchError({str(user_id): str(e)}) from e

        return self.processor.committed_intervals(
            user_id, records.availability, records.bookings, exclude_id=exclude_id
        )

    def _collect_busy_set(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date
    ) -> ParticipantBusySet:
        records = self.collect_user_records(
            user_id, start_date, end_date, include_name=True, strict=True
        )
        return self.processor.build(user_id, records.name, records.availability, records.bookings)

    def collect_busy_sets(
        self,
        participant_ids: List[str],
        start_date: datetime.date,
        end_date: datetime.date
    ) -> List[ParticipantBusySet]:
        """
        Fetch every participant's busy set concurrently.

        Returns:
            Busy sets in the order of `participant_ids`

        Raises:
            UpstreamFetchError: naming every participant whose data failed
        """
        self.logger.info(
            f"Collecting busy sets for {len(participant_ids)} participants "
            f"{start_date}..{end_date}"
        )

        results: Dict[str, ParticipantBusySet] = {}
        failures: Dict[str, str] = {}
        workers = max(1, min(self.settings.max_fetch_workers, len(participant_ids) or 1))

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self._collect_busy_set, pid, start_date, end_date): pid
                for pid in participant_ids
            }
            for future in concurrent.futures.as_completed(futures):
                pid = futures[future]
                try:
                    results[pid] = future.result()
                except StoreError as e:
                    self.logger.error(f"Error fetching data for {pid}: {e}")
                    failures[pid] = str(e)

        if failures:
            raise UpstreamFetchError(failures)

        self.logger.info(f"Collected {len(results)} busy sets")
        return [results[pid] for pid in participant_ids]
