"""
Fleet record-keeping models.

This package provides data models and the status aggregation for a fleet:
- VehicleStatus: Operational status buckets (ON_TRIP, AVAILABLE, etc.)
- VehicleRecord: A vehicle as kept in the fleet store
- Driver, FuelLog, MaintenanceRecord: Other fleet records
- Fleet: Everything loaded from one fleet file
- classify_vehicle: Resolve a record's raw status
- aggregate_fleet_status: Per-status counts and utilization for the dashboard
"""

from .status import VehicleStatus, ACTIVE_STATUSES
from .vehicle import VehicleRecord
from .driver import Driver
from .fuel_log import FuelLog
from .maintenance import MaintenanceRecord
from .classifier import ClassificationError, classify_vehicle, parse_status
from .calculations import count_statuses, active_count, utilization_percentage
from .presentation import (
    PresentationError,
    StatusStyle,
    StatusPresentation,
    load_presentation,
)
from .aggregator import StatusGroup, FleetStatus, aggregate_fleet_status
from .fleet import Fleet
from .loader import (
    load_fleet,
    create_fleet,
    save_vehicle,
    update_vehicle_status,
    retire_vehicle,
    delete_vehicle,
    save_driver,
    save_fuel_log,
    save_maintenance_record,
    complete_maintenance,
)

__all__ = [
    "VehicleStatus",
    "ACTIVE_STATUSES",
    "VehicleRecord",
    "Driver",
    "FuelLog",
    "MaintenanceRecord",
    "ClassificationError",
    "classify_vehicle",
    "parse_status",
    "count_statuses",
    "active_count",
    "utilization_percentage",
    "PresentationError",
    "StatusStyle",
    "StatusPresentation",
    "load_presentation",
    "StatusGroup",
    "FleetStatus",
    "aggregate_fleet_status",
    "Fleet",
    "load_fleet",
    "create_fleet",
    "save_vehicle",
    "update_vehicle_status",
    "retire_vehicle",
    "delete_vehicle",
    "save_driver",
    "save_fuel_log",
    "save_maintenance_record",
    "complete_maintenance",
]
