# File: src/services/availability_service.py

import datetime
from typing import Any, Dict, List

from src.core.config_manager import Config
from src.services.store_client import SupabaseClient
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class AvailabilityService:
    """Reads user_availability rows."""

    def __init__(self, client: SupabaseClient, table: str = Config.AVAILABILITY_TABLE):
        """
        Initialize availability service.

        Args:
            client: Store client
            table: Availability table name
        """
        self.client = client
        self.table = table

    def get_availability(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date
    ) -> List[Dict[str, Any]]:
        """
        Fetch a user's availability rows in a date range.

        NOTE: Returns raw rows; DataCollector converts them to
        AvailabilityRecord. Raises StoreError on failure.
        """
        logger.info(f"Fetching availability for {user_id} {start_date}..{end_date}")

        rows = self.client.select(
            self.table,
            filters=[
                ("user_id", f"eq.{user_id}"),
                ("date", f"gte.{start_date.isoformat()}"),
                ("date", f"lte.{end_date.isoformat()}"),
            ],
            order="date.asc,start_time.asc",
        )

        logger.info(f"Fetched {len(rows)} availability rows for {user_id}")
        return rows
