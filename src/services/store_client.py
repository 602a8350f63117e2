# File: src/services/store_client.py
"""
Read-only client for the hosted relational store (PostgREST API).
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from src.core.config_manager import Config
from src.models import StoreError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

Filter = Tuple[str, str]  # (column, "op.value"), e.g. ("date", "gte.2024-06-10")


class SupabaseClient:
    """Issues PostgREST selects and converts every failure into StoreError."""

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        timeout: float = None
    ):
        """
        Initialize store client.

        Args:
            base_url: Project URL (defaults to Config.SUPABASE_URL)
            api_key: Anon or service key (defaults to Config.SUPABASE_KEY)
            timeout: Per-request timeout in seconds
        """
        self.base_url = (base_url or Config.SUPABASE_URL).rstrip('/')
        self.api_key = api_key or Config.SUPABASE_KEY
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def table_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def select(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        columns: str = "*",
        order: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch rows from a table.

        Args:
            table: Table name
            filters: PostgREST filters; repeated columns are allowed
            columns: Select list
            order: Order clause, e.g. "date.asc,start_time.asc"

        Returns:
            List of row dictionaries

        Raises:
            StoreError: on network errors, timeouts, non-2xx or a non-list body
        """
        params: List[Filter] = [("select", columns)]
        params.extend(filters)
        if order:
            params.append(("order", order))

        logger.debug(f"GET {table} {params}")

        try:
            response = requests.get(
                self.table_url(table),
                headers=self.headers,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise StoreError(f"Request to {table} failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"Response from {table} is not JSON: {e}") from e

        if not isinstance(rows, list):
            raise StoreError(f"Unexpected response shape from {table}: {type(rows).__name__}")

        return rows
