# File: src/services/service_factory.py

from typing import Optional, Tuple

from src.models import EngineSettings
from src.services.availability_service import AvailabilityService
from src.services.booking_service import BookingService
from src.services.data_collector import DataCollector
from src.services.profile_service import ProfileService
from src.services.store_client import SupabaseClient
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class ServiceFactory:
    """Factory for creating service instances."""

    @staticmethod
    def create_client(base_url: str = None, api_key: str = None) -> SupabaseClient:
        """Create a store client (defaults come from Config)."""
        return SupabaseClient(base_url=base_url, api_key=api_key)

    @staticmethod
    def create_services(
        client: SupabaseClient
    ) -> Tuple[AvailabilityService, BookingService, ProfileService]:
        """
        Create service wrapper instances.

        Args:
            client: Store client shared by all services

        Returns:
            Tuple of (availability_service, booking_service, profile_service)
        """
        return (
            AvailabilityService(client),
            BookingService(client),
            ProfileService(client)
        )

    @staticmethod
    def create_data_collector(
        availability_service: AvailabilityService,
        booking_service: BookingService,
        profile_service: ProfileService,
        settings: Optional[EngineSettings] = None
    ) -> DataCollector:
        """
        Create data collector instance.

        Args:
            availability_service: Availability service instance
            booking_service: Booking service instance
            profile_service: Profile service instance
            settings: Engine settings

        Returns:
            DataCollector instance
        """
        return DataCollector(availability_service, booking_service, profile_service, settings)
