#!/usr/bin/env python3
"""Tests for calculation helper functions."""
import pytest

from fleetflow import (
    ClassificationError,
    VehicleRecord,
    VehicleStatus,
    active_count,
    count_statuses,
    utilization_percentage,
)


def make_records(*statuses):
    return [VehicleRecord(f"VH-{i:03d}", s) for i, s in enumerate(statuses, 1)]


class TestCountStatuses:
    """Tests for count_statuses."""

    def test_empty_has_all_statuses_at_zero(self):
        counts = count_statuses([])
        assert list(counts) == list(VehicleStatus)
        assert all(v == 0 for v in counts.values())

    def test_counts_each_status(self):
        counts = count_statuses(make_records("on_trip", "on_trip", "available", "in_shop"))
        assert counts[VehicleStatus.ON_TRIP] == 2
        assert counts[VehicleStatus.AVAILABLE] == 1
        assert counts[VehicleStatus.IN_SHOP] == 1
        assert counts[VehicleStatus.RETIRED] == 0
        assert counts[VehicleStatus.SUSPENDED] == 0

    def test_bad_record_aborts(self):
        with pytest.raises(ClassificationError):
            count_statuses(make_records("on_trip", "parked", "available"))


class TestActiveCount:
    """Tests for active_count."""

    def test_only_on_trip_counts(self):
        counts = {
            VehicleStatus.ON_TRIP: 3,
            VehicleStatus.AVAILABLE: 4,
            VehicleStatus.IN_SHOP: 1,
            VehicleStatus.RETIRED: 2,
            VehicleStatus.SUSPENDED: 1,
        }
        assert active_count(counts) == 3

    def test_missing_key_is_zero(self):
        assert active_count({VehicleStatus.AVAILABLE: 2}) == 0


class TestUtilizationPercentage:
    """Tests for utilization_percentage rounding."""

    def test_empty_fleet_is_zero(self):
        assert utilization_percentage(0, 0) == 0

    def test_half_rounds_to_fifty(self):
        assert utilization_percentage(1, 2) == 50

    def test_one_third_rounds_down(self):
        assert utilization_percentage(1, 3) == 33

    def test_two_thirds_rounds_up(self):
        assert utilization_percentage(2, 3) == 67

    def test_exact_half_point_rounds_up(self):
        """12.5% -> 13 and 37.5% -> 38 (not banker's rounding)."""
        assert utilization_percentage(1, 8) == 13
        assert utilization_percentage(3, 8) == 38
        assert utilization_percentage(1, 40) == 3  # 2.5%

    def test_bounds(self):
        assert utilization_percentage(0, 7) == 0
        assert utilization_percentage(7, 7) == 100

    def test_always_in_range(self):
        for total in range(1, 60):
            for active in range(total + 1):
                assert 0 <= utilization_percentage(active, total) <= 100
