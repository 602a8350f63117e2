# File: tests/integration/test_orchestrator.py
"""
Integration tests for the SchedulingOrchestrator pipeline.
Tests the full workflow with mocked store services.
"""

import pytest
from datetime import date, datetime
from unittest.mock import patch

import pytz

from src.core.config_manager import Config
from src.core.orchestrator import OrchestratorFactory, SchedulingOrchestrator
from src.models import (
    AvailabilityTemplate,
    EngineSettings,
    GridCell,
    RecurrenceRule,
    RequestValidationError,
    SelectionPhase,
    SlotState,
    StoreError,
    UpstreamFetchError,
)
from src.services.data_collector import DataCollector

JUNE_10 = date(2024, 6, 10)
JULY_1 = date(2024, 7, 1)

AVAILABILITY_ROWS = {
    'alice': [
        {'id': 'a1', 'user_id': 'alice', 'date': '2024-06-10', 'start_time': '09:00:00', 'end_time': '12:00:00'},
        {'id': 'a2', 'user_id': 'alice', 'date': '2024-07-01', 'start_time': '09:00:00', 'end_time': '17:00:00'},
    ],
    'bob': [
        {'id': 'b1', 'user_id': 'bob', 'date': '2024-07-01', 'start_time': '09:00:00', 'end_time': '17:00:00'},
    ],
}

BOOKING_ROWS = [
    {'id': 'm1', 'player1_id': 'alice', 'player2_id': 'carol', 'match_date': '2024-06-10',
     'start_time': '10:00:00', 'end_time': '11:00:00', 'status': 'confirmed'},
    {'id': 'm2', 'player1_id': 'bob', 'player2_id': 'carol', 'match_date': '2024-07-01',
     'start_time': '09:00:00', 'end_time': '12:00:00', 'status': 'accepted'},
    {'id': 'm3', 'player1_id': 'alice', 'player2_id': 'dave', 'match_date': '2024-06-10',
     'start_time': '11:00:00', 'end_time': '11:30:00', 'status': 'pending'},
]


def fake_availability(user_id, start, end):
    return [
        row for row in AVAILABILITY_ROWS.get(user_id, [])
        if start.isoformat() <= row['date'] <= end.isoformat()
    ]


def fake_bookings(user_id, start, end, statuses):
    wanted = {s.value for s in statuses}
    return [
        row for row in BOOKING_ROWS
        if user_id in (row['player1_id'], row['player2_id'])
        and start.isoformat() <= row['match_date'] <= end.isoformat()
        and row['status'] in wanted
    ]


@pytest.fixture
def orchestrator(mock_store_services):
    """Orchestrator over in-memory store rows."""
    availability, bookings, profiles = mock_store_services
    availability.get_availability.side_effect = fake_availability
    bookings.get_bookings.side_effect = fake_bookings
    profiles.get_display_name.side_effect = lambda uid: uid.title()

    settings = EngineSettings()
    return SchedulingOrchestrator(DataCollector(availability, bookings, profiles, settings), settings)


# ==================== Suggestion Pipeline Tests ====================

@pytest.mark.integration
class TestSuggestTimes:
    """Tests for suggest_times."""

    def test_first_common_slot(self, orchestrator):
        response = orchestrator.suggest_times({
            'requester_id': 'alice',
            'participant_ids': ['bob'],
            'start_date': '2024-07-01',
            'end_date': '2024-07-01',
            'duration_minutes': 60,
        })
        first = response.suggestions[0]
        assert first.start == pytz.UTC.localize(datetime(2024, 7, 1, 12))
        assert first.participants_available == ['alice', 'bob']

    def test_no_common_time_is_not_an_error(self, orchestrator):
        response = orchestrator.suggest_times({
            'participant_ids': ['alice', 'bob'],
            'start_date': '2024-06-10',
            'end_date': '2024-06-10',
            'duration_minutes': 60,
        })
        assert response.to_dict()['suggestions'] == []

    def test_invalid_request_fetches_nothing(self, orchestrator, mock_store_services):
        availability, _, _ = mock_store_services
        with pytest.raises(RequestValidationError):
            orchestrator.suggest_times({
                'participant_ids': ['alice'],
                'start_date': '2024-07-02',
                'end_date': '2024-07-01',
                'duration_minutes': 60,
            })
        availability.get_availability.assert_not_called()

    def test_any_failed_participant_aborts_search(self, orchestrator, mock_store_services):
        availability, _, _ = mock_store_services

        def flaky(user_id, start, end):
            if user_id == 'bob':
                raise StoreError("timeout")
            return fake_availability(user_id, start, end)

        availability.get_availability.side_effect = flaky
        with pytest.raises(UpstreamFetchError) as exc_info:
            orchestrator.suggest_times({
                'participant_ids': ['alice', 'bob'],
                'start_date': '2024-07-01',
                'end_date': '2024-07-01',
                'duration_minutes': 60,
            })
        assert exc_info.value.participant_ids == ['bob']


# ==================== Conflict Check Tests ====================

@pytest.mark.integration
class TestCheckConflict:
    """Tests for check_conflict."""

    def test_overlap_conflicts(self, orchestrator):
        result = orchestrator.check_conflict({
            'user_id': 'alice', 'date': '2024-06-10', 'start_time': '10:15', 'end_time': '10:45',
        })
        assert result.has_conflict is True

    def test_adjacent_is_free(self, orchestrator):
        result = orchestrator.check_conflict({
            'user_id': 'alice', 'date': '2024-06-10', 'start_time': '11:00', 'end_time': '11:30',
        })
        # the pending invite at 11:00 is not a commitment
        assert result.has_conflict is False

    def test_exclude_id(self, orchestrator):
        result = orchestrator.check_conflict({
            'user_id': 'alice', 'date': '2024-06-10', 'start_time': '10:00',
            'end_time': '11:00', 'exclude_id': 'm1',
        })
        assert result.has_conflict is False

    def test_store_failure_fails_closed(self, orchestrator, mock_store_services):
        availability, _, _ = mock_store_services
        availability.get_availability.side_effect = StoreError("down")
        result = orchestrator.check_conflict({
            'user_id': 'alice', 'date': '2024-06-10', 'start_time': '14:00', 'end_time': '15:00',
        })
        assert result.has_conflict is True
        assert 'error' in result.to_dict()


# ==================== Grid and Selection Tests ====================

@pytest.mark.integration
class TestGridAndSelection:
    """Tests for build_grid and start_selection."""

    def test_build_grid(self, orchestrator):
        grid = orchestrator.build_grid('alice', JUNE_10, JUNE_10)
        assert grid.is_hour_available(JUNE_10, 9) is True
        assert [c.state for c in grid.cells_for(JUNE_10, 10)] == [SlotState.BOOKED] * 4
        # pending invite overlays 11:00-11:30
        assert [c.state for c in grid.cells_for(JUNE_10, 11)] == [
            SlotState.BOOKED, SlotState.BOOKED, SlotState.AVAILABLE, SlotState.AVAILABLE
        ]

    def test_selection_over_built_grid(self, orchestrator):
        grid = orchestrator.build_grid('alice', JUNE_10, JUNE_10)
        machine = orchestrator.start_selection(grid)
        machine.press(GridCell(JUNE_10, 36))
        machine.move(GridCell(JUNE_10, 47))
        commit = machine.release()
        assert machine.phase == SelectionPhase.COMMITTED
        assert (commit.start_time, commit.end_time) == ("09:00", "10:00")

    def test_expand_availability(self, orchestrator):
        template = AvailabilityTemplate('alice', JUNE_10, '18:00', '20:00')
        records = orchestrator.expand_availability(template, RecurrenceRule('daily', end_date=date(2024, 6, 12)))
        assert len(records) == 2


# ==================== Factory Tests ====================

@pytest.mark.integration
class TestOrchestratorFactory:
    """Tests for OrchestratorFactory."""

    def test_invalid_config_raises(self, monkeypatch):
        monkeypatch.setattr(Config, "SUPABASE_URL", "")
        with pytest.raises(ValueError, match="Configuration validation failed"):
            OrchestratorFactory.create()

    def test_create_wires_services(self, monkeypatch):
        monkeypatch.setattr(Config, "SUPABASE_URL", "https://demo.supabase.co")
        monkeypatch.setattr(Config, "SUPABASE_KEY", "anon-key")
        orchestrator = OrchestratorFactory.create(EngineSettings(max_suggestions=3))
        assert orchestrator.search.settings.max_suggestions == 3
        assert orchestrator.data_collector.availability.client.base_url == "https://demo.supabase.co"

    def test_create_does_not_touch_network(self, monkeypatch):
        monkeypatch.setattr(Config, "SUPABASE_URL", "https://demo.supabase.co")
        monkeypatch.setattr(Config, "SUPABASE_KEY", "anon-key")
        with patch('src.services.store_client.requests.get') as get:
            OrchestratorFactory.create()
        get.assert_not_called()
