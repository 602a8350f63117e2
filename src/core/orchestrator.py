# File: src/core/orchestrator.py
"""
Main orchestrator module for Courtside Scheduler.
Coordinates the store-backed services and the pure scheduling engine.

Every entry point is split into a fetch phase (DataCollector, which may
fail) and a compute phase (pure functions over typed records).
"""

import datetime
from typing import List, Optional, Union

from src.core.common_availability import CommonAvailabilitySearch
from src.core.config_manager import Config
from src.core.conflict_detector import ConflictDetector
from src.core.selection import SelectionStateMachine
from src.core.slot_grid import SlotGridBuilder
from src.models import (
    AvailabilityRecord,
    AvailabilityTemplate,
    ConflictCheckRequest,
    ConflictCheckResult,
    EngineSettings,
    OccupancyGrid,
    RecurrenceRule,
    RequestValidationError,
    SearchRequest,
    SearchResponse,
    conflict_request_from_dict,
    search_request_from_dict,
)
from src.processors.recurrence_processor import expand_template
from src.services.data_collector import DataCollector
from src.services.service_factory import ServiceFactory
from src.utils.logger import log_banner, setup_logger

logger = setup_logger(__name__)


class SchedulingOrchestrator:
    """
    Entry point for the scheduling engine.

    Coordinates data collection, busy-set derivation, the common
    availability search, conflict checks and grid construction.
    """

    def __init__(self, data_collector: DataCollector, settings: Optional[EngineSettings] = None):
        """
        Initialize the orchestrator.

        Args:
            data_collector: Fetch-phase collaborator
            settings: Engine settings (defaults to EngineSettings())
        """
        logger.info("Initializing SchedulingOrchestrator")
        self.settings = settings or EngineSettings()
        self.data_collector = data_collector
        self.search = CommonAvailabilitySearch(self.settings)
        self.grid_builder = SlotGridBuilder(self.settings)
        self.detector = ConflictDetector(
            self.data_collector.collect_committed_intervals,
            timezone=self.settings.timezone
        )
        logger.debug(f"Engine settings: {self.settings.to_dict()}")

    def suggest_times(self, request: Union[dict, SearchRequest]) -> SearchResponse:
        """
        Find common free time for every participant.

        Raises:
            RequestValidationError: if the request is malformed
            UpstreamFetchError: if any participant's data could not be fetched
        """
        if isinstance(request, dict):
            request = search_request_from_dict(request)

        errors = request.validate()
        if errors:
            for error in errors:
                logger.warning(f"Invalid search request: {error}")
            raise RequestValidationError(errors)

        log_banner(
            logger,
            f"Searching {request.start_date}..{request.end_date} for "
            f"{len(request.participant_ids)} participants, {request.duration_minutes} min"
        )

        # Step 1: Fetch (all or nothing)
        busy_sets = self.data_collector.collect_busy_sets(
            request.participant_ids, request.start_date, request.end_date
        )

        # Step 2: Compute
        return self.search.find(request, busy_sets)

    def check_conflict(self, request: Union[dict, ConflictCheckRequest]) -> ConflictCheckResult:
        """
        Check one proposed interval against a user's commitments.

        A store failure yields has_conflict=True with the error attached.

        Raises:
            RequestValidationError: if the request is malformed
        """
        if isinstance(request, dict):
            request = conflict_request_from_dict(request)

        candidate = request.to_interval(self.settings.timezone)
        result = self.detector.check(request.user_id, candidate, exclude_id=request.exclude_id)
        logger.info(
            f"Conflict check for {request.user_id} on {request.date} "
            f"{request.start_time}-{request.end_time}: {result.has_conflict}"
        )
        return result

    def build_grid(
        self,
        user_id: str,
        start_date: datetime.date,
        end_date: datetime.date
    ) -> OccupancyGrid:
        """
        Build a user's occupancy grid over a date range.

        Raises:
            StoreError: if the user's records cannot be fetched
        """
        records = self.data_collector.collect_user_records(
            user_id,
            start_date,
            end_date,
            statuses=self.settings.grid_booking_statuses,
        )
        return self.grid_builder.build(
            user_id, start_date, end_date, records.availability, records.bookings
        )

    def start_selection(self, grid: OccupancyGrid) -> SelectionStateMachine:
        """Drag-to-select state machine over a built grid."""
        return SelectionStateMachine(grid, timezone=self.settings.timezone)

    def expand_availability(
        self,
        template: AvailabilityTemplate,
        rule: RecurrenceRule
    ) -> List[AvailabilityRecord]:
        """Concrete availability records for a recurring template."""
        return expand_template(template, rule)


class OrchestratorFactory:
    """Factory for creating SchedulingOrchestrator instances with dependency injection."""

    @staticmethod
    def create(settings: Optional[EngineSettings] = None) -> SchedulingOrchestrator:
        """
        Create a fully wired SchedulingOrchestrator.

        Returns:
            SchedulingOrchestrator backed by the hosted store

        Raises:
            ValueError: If configuration is invalid
        """
        logger.info("Creating SchedulingOrchestrator via factory")

        if not Config.validate():
            raise ValueError(
                "Configuration validation failed. "
                "Set SUPABASE_URL and SUPABASE_KEY in .env"
            )

        settings = settings or Config.load_engine_settings()
        client = ServiceFactory.create_client()
        services = ServiceFactory.create_services(client)
        collector = ServiceFactory.create_data_collector(*services, settings=settings)
        return SchedulingOrchestrator(collector, settings)
