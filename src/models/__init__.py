from .enums import SlotState, BookingStatus, PrivacyLevel, RecurrencePattern, SelectionPhase
from .errors import (
    ValidationError,
    SchedulingError,
    InvalidIntervalError,
    RequestValidationError,
    StoreError,
    UpstreamFetchError,
)
from .common import parse_date, time_to_minutes, minutes_to_time_str
from .interval import Interval, overlaps, contains, clip, merge_intervals
from .availability import AvailabilityRecord, availability_from_dict, row_is_blocked
from .booking import BookingRecord, booking_from_dict
from .grid import GridCell, OccupancyCell, OccupancyGrid
from .search import (
    PreferredWindow,
    SearchRequest,
    search_request_from_dict,
    ParticipantBusySet,
    SuggestionSlot,
    SearchResponse,
)
from .api import ConflictCheckRequest, conflict_request_from_dict, ConflictCheckResult, SelectionCommit
from .config import EngineSettings
from .recurrence import RecurrenceRule, AvailabilityTemplate

__all__ = [
    "SlotState",
    "BookingStatus",
    "PrivacyLevel",
    "RecurrencePattern",
    "SelectionPhase",
    "ValidationError",
    "SchedulingError",
    "InvalidIntervalError",
    "RequestValidationError",
    "StoreError",
    "UpstreamFetchError",
    "parse_date",
    "time_to_minutes",
    "minutes_to_time_str",
    "Interval",
    "overlaps",
    "contains",
    "clip",
    "merge_intervals",
    "AvailabilityRecord",
    "availability_from_dict",
    "row_is_blocked",
    "BookingRecord",
    "booking_from_dict",
    "GridCell",
    "OccupancyCell",
    "OccupancyGrid",
    "PreferredWindow",
    "SearchRequest",
    "search_request_from_dict",
    "ParticipantBusySet",
    "SuggestionSlot",
    "SearchResponse",
    "ConflictCheckRequest",
    "conflict_request_from_dict",
    "ConflictCheckResult",
    "SelectionCommit",
    "EngineSettings",
    "RecurrenceRule",
    "AvailabilityTemplate",
]
