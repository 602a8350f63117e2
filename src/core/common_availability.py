# File: src/core/common_availability.py
"""
Multi-participant common-availability search.

Pure compute phase: receives every participant's busy set (already fetched)
and enumerates candidate intervals where all of them are free.
"""

import datetime
from typing import Dict, List, Optional, Tuple

from src.models import (
    EngineSettings,
    Interval,
    ParticipantBusySet,
    SearchRequest,
    SearchResponse,
    SuggestionSlot,
    UpstreamFetchError,
)
from src.models.common import at_minutes, date_range, js_day_of_week, to_zone, wall_clock_exists
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class CommonAvailabilitySearch:
    """Finds the first N chronological slots where every participant is free."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize search.

        Args:
            settings: Engine settings (default window, step, cap, timezone)
        """
        self.settings = settings or EngineSettings()

    def search_window(self, request: SearchRequest, day: datetime.date) -> Tuple[int, int]:
        """Search window for a date in minutes since midnight: preferred hours or the default."""
        preferred = request.window_for(js_day_of_week(day))
        if preferred:
            return preferred.start_hour * 60, preferred.end_hour * 60
        return self.settings.search_start_hour * 60, self.settings.search_end_hour * 60

    def candidates(self, request: SearchRequest, day: datetime.date):
        """
        Yield candidate intervals for one date in strictly increasing start order.

        Starts step through the window in local wall-clock time. A start that
        does not exist locally (the skipped hour of a spring-forward day) is
        dropped. Each candidate lasts `duration_minutes` of absolute time and
        must end no later than the window's end, so a slot never runs past the
        preferred hours even when its start is inside them.
        """
        window_start, window_end = self.search_window(request, day)
        duration = datetime.timedelta(minutes=request.duration_minutes)
        tz = self.settings.timezone
        end_limit = at_minutes(day, window_end, tz)

        previous = None
        minute = window_start
        while minute < window_end:
            if wall_clock_exists(day, minute, tz):
                start = at_minutes(day, minute, tz)
                end = to_zone(start + duration, tz)
                if end > end_limit:
                    return
                if previous is None or start > previous:
                    yield Interval(start, end)
                    previous = start
            minute += self.settings.search_step_minutes

    def find(self, request: SearchRequest, busy_sets: List[ParticipantBusySet]) -> SearchResponse:
        """
        Run the search.

        Args:
            request: A validated search request
            busy_sets: One busy set per participant in the request

        Returns:
            SearchResponse with at most `max_suggestions` chronological slots

        Raises:
            UpstreamFetchError: if a participant has no busy set
        """
        by_user: Dict[str, ParticipantBusySet] = {b.user_id: b for b in busy_sets}
        missing = [pid for pid in request.participant_ids if pid not in by_user]
        if missing:
            raise UpstreamFetchError({pid: "busy set missing from fetch phase" for pid in missing})

        ordered = [by_user[pid] for pid in request.participant_ids]
        participant_ids = [b.user_id for b in ordered]
        require_declared = self.settings.require_declared_availability
        cap = self.settings.max_suggestions

        suggestions: List[SuggestionSlot] = []
        checked = 0

        for day in date_range(request.start_date, request.end_date):
            for candidate in self.candidates(request, day):
                checked += 1
                # all() short-circuits on the first busy participant
                if all(b.is_free_for(candidate, require_declared) for b in ordered):
                    suggestions.append(SuggestionSlot(
                        start=candidate.start,
                        end=candidate.end,
                        participants_available=list(participant_ids),
                    ))
                    if len(suggestions) >= cap:
                        logger.info(f"Reached suggestion cap ({cap}) after {checked} candidates")
                        return SearchResponse(suggestions)

        logger.info(
            f"Search over {request.start_date}..{request.end_date} for "
            f"{len(ordered)} participants: {len(suggestions)} slots from {checked} candidates"
        )
        return SearchResponse(suggestions)
