"""FuelLog class for refuelling records."""
from typing import Optional


class FuelLog:
    """A record of fuel added to a vehicle."""

    def __init__(
            self,
            vehicle_id: str,
            date: str,
            liters: float,
            cost: Optional[float] = None,
            odometer: Optional[float] = None,
    ):
        self.vehicle_id = vehicle_id
        self.date = date
        self.liters = liters
        self.cost = cost
        self.odometer = odometer
