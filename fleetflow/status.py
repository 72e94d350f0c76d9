"""VehicleStatus enum for operational status buckets."""

from enum import Enum


class VehicleStatus(Enum):
    """Operational status of a vehicle. Declaration order is canonical order."""

    ON_TRIP = "on_trip"
    AVAILABLE = "available"
    IN_SHOP = "in_shop"
    RETIRED = "retired"
    SUSPENDED = "suspended"


# Statuses counted as "in active service" for utilization
ACTIVE_STATUSES = frozenset({VehicleStatus.ON_TRIP})
