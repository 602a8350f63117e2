# File: src/services/profile_service.py

from src.core.config_manager import Config
from src.services.store_client import SupabaseClient
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

UNKNOWN_USER = "Unknown User"


class ProfileService:
    """Resolves participant display names."""

    def __init__(self, client: SupabaseClient, table: str = Config.PROFILES_TABLE):
        self.client = client
        self.table = table

    def get_display_name(self, user_id: str) -> str:
        """'First Last' for the user; a missing profile is not an error."""
        rows = self.client.select(
            self.table,
            filters=[("id", f"eq.{user_id}")],
            columns="first_name,last_name",
        )
        if not rows:
            logger.debug(f"No profile for {user_id}")
            return UNKNOWN_USER

        profile = rows[0]
        name = " ".join(p for p in (profile.get('first_name'), profile.get('last_name')) if p)
        return name or UNKNOWN_USER
