"""VehicleRecord class - a vehicle as kept in the fleet store."""

from typing import Any, Dict, Optional


class VehicleRecord:
    """
    A vehicle record.

    `status` is the raw value from the store and is not checked here;
    use classify_vehicle() to resolve it to a VehicleStatus.
    """

    def __init__(
        self,
        vehicle_id: str,
        status: Any,
        name: Optional[str] = None,
        model: Optional[str] = None,
        license_plate: Optional[str] = None,
        vehicle_type: Optional[str] = None,
        max_capacity: Optional[float] = None,
        odometer: Optional[float] = None,
        region: Optional[str] = None,
        acquisition_cost: Optional[float] = None,
        driver_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.vehicle_id = vehicle_id
        self.status = status
        self.name = name
        self.model = model
        self.license_plate = license_plate
        self.vehicle_type = vehicle_type
        self.max_capacity = max_capacity
        self.odometer = odometer
        self.region = region
        self.acquisition_cost = acquisition_cost
        self.driver_id = driver_id
        self.extra = extra or {}

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. 'Tata Ace (GJ01AB1234)'."""
        base = self.name or self.vehicle_id
        if self.license_plate:
            return f"{base} ({self.license_plate})"
        return base
