"""Resolve raw vehicle records to a VehicleStatus."""

from typing import Any

from .status import VehicleStatus
from .vehicle import VehicleRecord

_BY_VALUE = {status.value: status for status in VehicleStatus}


class ClassificationError(ValueError):
    """A vehicle record's status is not one of the canonical values."""

    def __init__(self, vehicle_id: Any, raw_status: Any):
        self.vehicle_id = vehicle_id
        self.raw_status = raw_status
        super().__init__(
            f"Vehicle {vehicle_id!r} has unrecognized status {raw_status!r} "
            f"(expected one of: {', '.join(_BY_VALUE)})"
        )


def parse_status(raw: Any, vehicle_id: Any = None) -> VehicleStatus:
    """
    Map a raw status value to a VehicleStatus.

    Accepts a VehicleStatus member or its exact string value. Matching is
    case sensitive; there is no fallback bucket.
    """
    if isinstance(raw, VehicleStatus):
        return raw
    if isinstance(raw, str) and raw in _BY_VALUE:
        return _BY_VALUE[raw]
    raise ClassificationError(vehicle_id, raw)


def classify_vehicle(record: VehicleRecord) -> VehicleStatus:
    """Return the VehicleStatus of a record, or raise ClassificationError."""
    return parse_status(record.status, record.vehicle_id)
