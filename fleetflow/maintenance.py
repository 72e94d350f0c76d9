"""MaintenanceRecord class for service logs."""
from typing import Optional


class MaintenanceRecord:
    """A service performed (or scheduled) on a vehicle."""

    def __init__(
            self,
            vehicle_id: str,
            description: str,
            date: str,
            cost: Optional[float] = None,
            state: str = "scheduled",
    ):
        self.vehicle_id = vehicle_id
        self.description = description
        self.date = date
        self.cost = cost
        self.state = state

    @property
    def is_open(self) -> bool:
        return self.state != "done"
