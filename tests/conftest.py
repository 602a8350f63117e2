# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable records, settings and mocks for all tests.
"""

import pytest
from datetime import date
from pathlib import Path
from unittest.mock import Mock
import sys

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.models import (
    AvailabilityRecord,
    BookingRecord,
    BookingStatus,
    EngineSettings,
    Interval,
    ParticipantBusySet,
    time_to_minutes,
)
from src.core.slot_grid import SlotGridBuilder
from src.processors.busy_set_processor import BusySetProcessor


# ==================== Date/Time Fixtures ====================

@pytest.fixture
def match_day():
    """Monday 2024-06-10."""
    return date(2024, 6, 10)


@pytest.fixture
def make_interval():
    """Factory for UTC intervals on one date from 'HH:MM' strings."""
    def _make(day: date, start: str, end: str, timezone: str = "UTC") -> Interval:
        return Interval.on_date(day, time_to_minutes(start), time_to_minutes(end), timezone)

    return _make


# ==================== Settings Fixtures ====================

@pytest.fixture
def settings():
    """Default engine settings (UTC, 15-minute slots, 30-minute search step)."""
    return EngineSettings()


# ==================== Record Fixtures ====================

@pytest.fixture
def morning_availability(match_day):
    """alice free 09:00-12:00 on the match day."""
    return AvailabilityRecord(
        id="avail_1",
        user_id="alice",
        date=match_day,
        start_time="09:00",
        end_time="12:00",
    )


@pytest.fixture
def mid_morning_booking(match_day):
    """Confirmed match for alice and bob 10:00-11:00."""
    return BookingRecord(
        id="booking_1",
        user_ids=["alice", "bob"],
        date=match_day,
        start_time="10:00",
        end_time="11:00",
        status=BookingStatus.CONFIRMED,
    )


@pytest.fixture
def alice_grid(settings, match_day, morning_availability, mid_morning_booking):
    """alice's one-day grid: free 09-12 with a booking 10-11."""
    return SlotGridBuilder(settings).build(
        "alice", match_day, match_day, [morning_availability], [mid_morning_booking]
    )


@pytest.fixture
def create_busy_set():
    """Factory fixture for participant busy sets from records."""
    def _create(user_id: str, availability=(), bookings=(), name: str = None) -> ParticipantBusySet:
        return BusySetProcessor(EngineSettings()).build(
            user_id, name or user_id.title(), list(availability), list(bookings)
        )

    return _create


# ==================== Store Row Fixtures ====================

@pytest.fixture
def availability_row():
    """user_availability row as returned by the store."""
    return {
        'id': 'a1',
        'user_id': 'alice',
        'date': '2024-07-01',
        'start_time': '09:00:00',
        'end_time': '17:00:00',
        'is_available': True,
        'is_blocked': False,
        'privacy_level': 'public',
    }


@pytest.fixture
def booking_row():
    """match_bookings row as returned by the store."""
    return {
        'id': 'b1',
        'player1_id': 'bob',
        'player2_id': 'carol',
        'match_date': '2024-07-01',
        'start_time': '09:00:00',
        'end_time': '12:00:00',
        'status': 'confirmed',
    }


# ==================== Mock Service Fixtures ====================

@pytest.fixture
def mock_response():
    """Factory for a mocked requests.Response."""
    def _create(payload, status_code: int = 200):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        return response

    return _create


@pytest.fixture
def mock_store_services():
    """Mock availability, booking and profile services with empty results."""
    availability = Mock()
    bookings = Mock()
    profiles = Mock()

    availability.get_availability.return_value = []
    bookings.get_bookings.return_value = []
    profiles.get_display_name.return_value = "Unknown User"

    return availability, bookings, profiles


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "external: mark test as requiring external services"
    )


# ==================== Auto-use Fixtures ====================

@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keep log files and env overrides out of the working tree."""
    monkeypatch.setenv("COURTSIDE_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("SEARCH_STEP_MINUTES", raising=False)
    monkeypatch.delenv("MAX_SUGGESTIONS", raising=False)
    yield


# ==================== Helper Functions ====================

@pytest.fixture
def assert_no_overlaps():
    """Helper asserting a list of intervals is pairwise disjoint."""
    def _assert(intervals):
        ordered = sorted(intervals)
        for earlier, later in zip(ordered, ordered[1:]):
            assert earlier.end <= later.start, f"{earlier} overlaps {later}"

    return _assert

