# File: src/services/booking_service.py

import datetime
from typing import Any, Dict, Iterable, List

from src.core.config_manager import Config
from src.models import BookingStatus
from src.services.store_client import SupabaseClient
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class BookingService:
    """Reads match_bookings rows for a participant."""

    def __init__(self, client: SupabaseClient, table: str = Config.BOOKINGS_TABLE):
        """
        Initialize booking service.

        Args:
            client: Store client
            table: Bookings table name
        """
        self.client = client
        self.table = table

    def get_bookings(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date,
        statuses: Iterable[BookingStatus]
    ) -> List[Dict[str, Any]]:
        """
        Fetch bookings where the user is either player.

        NOTE: Returns raw rows; DataCollector converts them to
        BookingRecord. Raises StoreError on failure.
        """
        status_list = ",".join(s.value for s in statuses)
        logger.info(f"Fetching bookings for {user_id} {start_date}..{end_date} ({status_list})")

        rows = self.client.select(
            self.table,
            filters=[
                ("or", f"(player1_id.eq.{user_id},player2_id.eq.{user_id})"),
                ("match_date", f"gte.{start_date.isoformat()}"),
                ("match_date", f"lte.{end_date.isoformat()}"),
                ("status", f"in.({status_list})"),
            ],
            order="match_date.asc,start_time.asc",
        )

        logger.info(f"Fetched {len(rows)} booking rows for {user_id}")
        return rows
