"""Fleet class - everything loaded from one fleet file."""

from typing import List, Optional

from .aggregator import FleetStatus, aggregate_fleet_status
from .driver import Driver
from .fuel_log import FuelLog
from .maintenance import MaintenanceRecord
from .presentation import StatusPresentation
from .vehicle import VehicleRecord


class Fleet:
    """Vehicles, drivers, fuel logs and maintenance records for one fleet."""

    def __init__(
        self,
        vehicles: Optional[List[VehicleRecord]] = None,
        drivers: Optional[List[Driver]] = None,
        fuel_logs: Optional[List[FuelLog]] = None,
        maintenance: Optional[List[MaintenanceRecord]] = None,
    ):
        self.vehicles = vehicles or []
        self.drivers = drivers or []
        self.fuel_logs = fuel_logs or []
        self.maintenance = maintenance or []

    def get_vehicle(self, vehicle_id: str) -> Optional[VehicleRecord]:
        """Find a vehicle by id."""
        for vehicle in self.vehicles:
            if vehicle.vehicle_id == vehicle_id:
                return vehicle
        return None

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        for driver in self.drivers:
            if driver.driver_id == driver_id:
                return driver
        return None

    def vehicles_with_status(self, status: str) -> List[VehicleRecord]:
        """Vehicles whose raw status equals `status`."""
        return [v for v in self.vehicles if v.status == status]

    def fuel_logs_for(self, vehicle_id: str) -> List[FuelLog]:
        return [f for f in self.fuel_logs if f.vehicle_id == vehicle_id]

    def maintenance_for(self, vehicle_id: str) -> List[MaintenanceRecord]:
        return [m for m in self.maintenance if m.vehicle_id == vehicle_id]

    def status_summary(
        self, presentation: Optional[StatusPresentation] = None
    ) -> FleetStatus:
        """Aggregate current vehicle statuses (default palette if none given)."""
        return aggregate_fleet_status(
            self.vehicles, presentation or StatusPresentation.default()
        )
