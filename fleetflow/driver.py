"""Driver class for driver profiles."""

from typing import Optional


class Driver:
    """A driver profile."""

    def __init__(
            self,
            driver_id: str,
            name: str,
            license_number: Optional[str] = None,
            license_category: Optional[str] = None,
            license_expiry: Optional[str] = None,
            status: Optional[str] = None,
            safety_score: Optional[float] = None,
    ):
        self.driver_id = driver_id
        self.name = name
        self.license_number = license_number
        self.license_category = license_category
        self.license_expiry = license_expiry
        self.status = status
        self.safety_score = safety_score
