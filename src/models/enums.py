# File: src/models/enums.py

from enum import Enum


class SlotState(Enum):
    """Resolved state of one 15-minute grid cell."""
    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"
    BOOKED = "booked"

    @property
    def rank(self) -> int:
        """Precedence rank: BOOKED > AVAILABLE > UNAVAILABLE."""
        return _SLOT_RANKS[self]


_SLOT_RANKS = {
    SlotState.UNAVAILABLE: 0,
    SlotState.AVAILABLE: 1,
    SlotState.BOOKED: 2,
}


class BookingStatus(Enum):
    """Lifecycle of a match booking / invite."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CANCELLED = "cancelled"


class PrivacyLevel(Enum):
    """Who may see an availability declaration."""
    PUBLIC = "public"
    FRIENDS = "friends"
    PRIVATE = "private"


class RecurrencePattern(Enum):
    """Repeat patterns for availability templates."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class SelectionPhase(Enum):
    """States of the drag-to-select machine."""
    IDLE = "idle"
    SELECTING = "selecting"
    COMMITTED = "committed"
