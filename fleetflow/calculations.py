"""Helper functions for fleet status calculations."""

from typing import Dict, Sequence

from .classifier import classify_vehicle
from .status import ACTIVE_STATUSES, VehicleStatus
from .vehicle import VehicleRecord


def count_statuses(records: Sequence[VehicleRecord]) -> Dict[VehicleStatus, int]:
    """
    Count vehicles per status.

    Every status is present in the result, in canonical order. The first
    record that fails classification aborts the count.
    """
    counts = {status: 0 for status in VehicleStatus}
    for record in records:
        counts[classify_vehicle(record)] += 1
    return counts


def active_count(counts: Dict[VehicleStatus, int]) -> int:
    """Number of vehicles in active service."""
    return sum(counts.get(status, 0) for status in ACTIVE_STATUSES)


def utilization_percentage(active: int, total: int) -> int:
    """
    Percentage of `total` that is `active`, rounded half up.

    - Empty fleet (total == 0): 0
    - Integer arithmetic, so 1/8 (12.5%) gives 13 exactly
    """
    if total <= 0:
        return 0
    return (200 * active + total) // (2 * total)
