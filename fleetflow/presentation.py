"""Display labels and chart colors for each VehicleStatus."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from .status import VehicleStatus


@dataclass(frozen=True)
class StatusStyle:
    """Label and color token for one status."""

    label: str
    color: str


class PresentationError(ValueError):
    """A presentation table or override file is malformed."""


class StatusPresentation:
    """Mapping of every VehicleStatus to its StatusStyle."""

    def __init__(self, styles: Mapping[VehicleStatus, StatusStyle]):
        missing = [s.value for s in VehicleStatus if s not in styles]
        if missing:
            raise PresentationError(f"No presentation for status: {', '.join(missing)}")
        self._styles = {status: styles[status] for status in VehicleStatus}

    def __getitem__(self, status: VehicleStatus) -> StatusStyle:
        return self._styles[status]

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {
            status.value: {"label": style.label, "color": style.color}
            for status, style in self._styles.items()
        }

    @classmethod
    def default(cls) -> "StatusPresentation":
        """Stock dashboard palette."""
        return cls(
            {
                VehicleStatus.ON_TRIP: StatusStyle("On Trip", "#38bdf8"),
                VehicleStatus.AVAILABLE: StatusStyle("Available", "#22C55E"),
                VehicleStatus.IN_SHOP: StatusStyle("In Shop", "#F59E0B"),
                VehicleStatus.RETIRED: StatusStyle("Retired", "#94A3B8"),
                VehicleStatus.SUSPENDED: StatusStyle("Suspended", "#EF4444"),
            }
        )

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> "StatusPresentation":
        """
        Return a copy with some labels/colors replaced.

        `overrides` is keyed by status value, e.g. {"on_trip": {"color": "blue"}}.
        Each value must be a mapping; only `label` and `color` are read.
        """
        by_value = {s.value: s for s in VehicleStatus}
        styles = dict(self._styles)
        for key, fields in overrides.items():
            if key not in by_value:
                raise PresentationError(f"Unknown status in presentation overrides: {key!r}")
            if not isinstance(fields, Mapping):
                raise PresentationError(f"{key!r}: expected a mapping with label/color")
            status = by_value[key]
            current = styles[status]
            styles[status] = StatusStyle(
                label=str(fields.get("label", current.label)),
                color=str(fields.get("color", current.color)),
            )
        return StatusPresentation(styles)


def load_presentation(filename: Union[str, Path]) -> StatusPresentation:
    """
    Load presentation overrides from a YAML file, merged over the defaults.

    Raises PresentationError for anything but a mapping of status -> label/color.
    """
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    if not isinstance(data, dict):
        raise PresentationError(f"{filename}: expected a mapping of status -> label/color")
    return StatusPresentation.default().with_overrides(data)
