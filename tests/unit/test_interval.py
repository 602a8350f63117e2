# File: tests/unit/test_interval.py
"""
Unit tests for the half-open Interval type and interval algebra.
"""

import pytest
from datetime import date, datetime, timedelta

import pytz

from src.models import Interval, InvalidIntervalError, clip, contains, merge_intervals, overlaps
from src.models.interval import any_overlap


def at(hour, minute=0, day=10):
    return pytz.UTC.localize(datetime(2024, 6, day, hour, minute))


# ==================== Construction Tests ====================

class TestIntervalConstruction:
    """Tests for Interval validation."""

    def test_valid_interval(self):
        interval = Interval(at(9), at(10))
        assert interval.duration_minutes() == 60

    def test_zero_length_raises_error(self):
        with pytest.raises(InvalidIntervalError, match="before end"):
            Interval(at(9), at(9))

    def test_inverted_raises_error(self):
        with pytest.raises(InvalidIntervalError):
            Interval(at(10), at(9))

    def test_invalid_interval_is_a_value_error(self):
        with pytest.raises(ValueError):
            Interval(at(10), at(9))

    def test_mixed_naive_and_aware_raises_error(self):
        with pytest.raises(InvalidIntervalError, match="naive"):
            Interval(datetime(2024, 6, 10, 9), at(10))

    def test_on_date_builds_from_minutes(self):
        interval = Interval.on_date(date(2024, 6, 10), 9 * 60, 10 * 60 + 30, "UTC")
        assert interval.start == at(9)
        assert interval.end == at(10, 30)

    def test_on_date_end_of_day_rolls_to_midnight(self):
        interval = Interval.on_date(date(2024, 6, 10), 23 * 60, 24 * 60, "UTC")
        assert interval.end == at(0, day=11)

    def test_on_date_uses_local_wall_clock(self):
        interval = Interval.on_date(date(2024, 6, 10), 9 * 60, 10 * 60, "America/New_York")
        assert interval.start.astimezone(pytz.UTC) == at(13)


# ==================== Overlap Tests ====================

class TestOverlaps:
    """Tests for the half-open overlap rule."""

    def test_overlapping(self):
        assert overlaps(Interval(at(9), at(11)), Interval(at(10), at(12))) is True

    def test_touching_do_not_overlap(self):
        a = Interval(at(9), at(10))
        b = Interval(at(10), at(11))
        assert overlaps(a, b) is False
        assert overlaps(b, a) is False

    def test_nested_overlap(self):
        assert overlaps(Interval(at(9), at(12)), Interval(at(10), at(11))) is True

    def test_overlap_is_symmetric(self):
        a = Interval(at(9), at(10, 30))
        b = Interval(at(10), at(11))
        assert overlaps(a, b) == overlaps(b, a)

    def test_method_form(self):
        assert Interval(at(9), at(10)).overlaps_with(Interval(at(9, 59), at(11))) is True

    def test_any_overlap(self):
        busy = [Interval(at(8), at(9)), Interval(at(12), at(13))]
        assert any_overlap(Interval(at(9), at(12)), busy) is False
        assert any_overlap(Interval(at(11), at(12, 30)), busy) is True


# ==================== Contains / Clip Tests ====================

class TestContainsAndClip:
    """Tests for point containment and clipping."""

    def test_contains_start_not_end(self):
        interval = Interval(at(9), at(10))
        assert contains(interval, at(9)) is True
        assert contains(interval, at(9, 59)) is True
        assert contains(interval, at(10)) is False

    def test_contains_interval(self):
        outer = Interval(at(9), at(17))
        assert outer.contains_interval(Interval(at(9), at(17))) is True
        assert outer.contains_interval(Interval(at(16), at(18))) is False

    def test_clip_to_window(self):
        clipped = clip(Interval(at(8), at(12)), Interval(at(9), at(10)))
        assert clipped == Interval(at(9), at(10))

    def test_clip_disjoint_returns_none(self):
        assert clip(Interval(at(8), at(9)), Interval(at(9), at(10))) is None


# ==================== Merge Tests ====================

class TestMergeIntervals:
    """Tests for merge_intervals."""

    def test_merges_overlapping_and_touching(self):
        merged = merge_intervals([
            Interval(at(9), at(10)),
            Interval(at(10), at(11)),
            Interval(at(10, 30), at(12)),
            Interval(at(14), at(15)),
        ])
        assert merged == [Interval(at(9), at(12)), Interval(at(14), at(15))]

    def test_result_is_order_independent(self):
        intervals = [
            Interval(at(14), at(15)),
            Interval(at(9), at(10)),
            Interval(at(9, 30), at(11)),
        ]
        assert merge_intervals(intervals) == merge_intervals(list(reversed(intervals)))

    def test_contained_interval_is_absorbed(self):
        merged = merge_intervals([Interval(at(9), at(17)), Interval(at(10), at(11))])
        assert merged == [Interval(at(9), at(17))]

    def test_empty(self):
        assert merge_intervals([]) == []

    def test_result_is_sorted_and_disjoint(self, assert_no_overlaps):
        base = at(6)
        intervals = [
            Interval(base + timedelta(minutes=m), base + timedelta(minutes=m + 45))
            for m in (300, 0, 120, 30, 600)
        ]
        merged = merge_intervals(intervals)
        assert merged == sorted(merged)
        assert_no_overlaps(merged)
