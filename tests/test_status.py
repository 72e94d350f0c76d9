#!/usr/bin/env python3
"""Tests for VehicleStatus enum."""

from fleetflow import VehicleStatus, ACTIVE_STATUSES


class TestVehicleStatus:
    """Tests for VehicleStatus values and ordering."""

    def test_canonical_values(self):
        """Values are the strings used in fleet files."""
        assert [s.value for s in VehicleStatus] == [
            "on_trip",
            "available",
            "in_shop",
            "retired",
            "suspended",
        ]

    def test_closed_set(self):
        assert len(VehicleStatus) == 5

    def test_only_on_trip_is_active(self):
        assert ACTIVE_STATUSES == frozenset({VehicleStatus.ON_TRIP})
