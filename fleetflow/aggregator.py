"""Fleet status aggregation for the dashboard donut chart."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from .calculations import active_count, count_statuses, utilization_percentage
from .presentation import StatusPresentation
from .status import VehicleStatus
from .vehicle import VehicleRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusGroup:
    """One chart segment: a status, its display metadata, and its count."""

    status: VehicleStatus
    label: str
    color: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "label": self.label,
            "color": self.color,
            "value": self.value,
        }


@dataclass(frozen=True)
class FleetStatus:
    """Aggregation result: non-empty status groups plus utilization."""

    status_groups: List[StatusGroup] = field(default_factory=list)
    utilization: int = 0

    @property
    def total(self) -> int:
        return sum(g.value for g in self.status_groups)

    def count(self, status: VehicleStatus) -> int:
        """Vehicles in `status` (0 when the group was omitted)."""
        for group in self.status_groups:
            if group.status == status:
                return group.value
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statusGroups": [g.to_dict() for g in self.status_groups],
            "utilization": self.utilization,
        }


def aggregate_fleet_status(
    records: Sequence[VehicleRecord],
    presentation: StatusPresentation,
) -> FleetStatus:
    """
    Classify every vehicle, count per status, and compute utilization.

    Logic:
    - Any ClassificationError aborts the whole aggregation
    - Groups are emitted in canonical status order; zero counts are omitted
    - Utilization = on_trip / whole fleet, rounded half up; 0 for an empty fleet

    Args:
        records: Fully materialised vehicle records (never mutated)
        presentation: Labels and colors attached to each group
    """
    if isinstance(records, Iterator):
        raise TypeError("records must be a sequence, not an iterator")

    counts = count_statuses(records)
    total = sum(counts.values())
    utilization = utilization_percentage(active_count(counts), total)

    groups = [
        StatusGroup(
            status=status,
            label=presentation[status].label,
            color=presentation[status].color,
            value=value,
        )
        for status, value in counts.items()
        if value > 0
    ]

    logger.debug("Aggregated %d vehicles: utilization=%d%%", total, utilization)
    return FleetStatus(status_groups=groups, utilization=utilization)
