"""YAML loading and saving utilities for fleet data."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .classifier import parse_status
from .driver import Driver
from .fleet import Fleet
from .fuel_log import FuelLog
from .maintenance import MaintenanceRecord
from .status import VehicleStatus
from .vehicle import VehicleRecord

logger = logging.getLogger(__name__)

# camelCase file key -> VehicleRecord attribute
_VEHICLE_FIELDS = {
    "name": "name",
    "model": "model",
    "licensePlate": "license_plate",
    "type": "vehicle_type",
    "maxCapacity": "max_capacity",
    "odometer": "odometer",
    "region": "region",
    "acquisitionCost": "acquisition_cost",
    "driverId": "driver_id",
}


def _require_id(dct: Dict[str, Any], key: str, section: str) -> str:
    """Return dct[key] as a string; a missing or null id raises ValueError."""
    value = dct.get(key)
    if value is None:
        raise ValueError(f"{section} entry without {key!r}: {dct!r}")
    return str(value)


def _parse_vehicle(dct: Dict[str, Any]) -> VehicleRecord:
    """Parse a vehicle dict. Unknown keys are kept in `extra`."""
    known = {"id", "status", *_VEHICLE_FIELDS}
    return VehicleRecord(
        _require_id(dct, "id", "vehicles"),
        dct.get("status"),
        extra={k: v for k, v in dct.items() if k not in known},
        **{attr: dct.get(key) for key, attr in _VEHICLE_FIELDS.items()},
    )


def _parse_driver(dct: Dict[str, Any]) -> Driver:
    return Driver(
        _require_id(dct, "id", "drivers"),
        dct["name"],
        dct.get("licenseNumber"),
        dct.get("licenseCategory"),
        dct.get("licenseExpiry"),
        dct.get("status"),
        dct.get("safetyScore"),
    )


def _parse_fuel_log(dct: Dict[str, Any]) -> FuelLog:
    return FuelLog(
        _require_id(dct, "vehicleId", "fuelLogs"),
        dct["date"],
        dct["liters"],
        dct.get("cost"),
        dct.get("odometer"),
    )


def _parse_maintenance(dct: Dict[str, Any]) -> MaintenanceRecord:
    return MaintenanceRecord(
        _require_id(dct, "vehicleId", "maintenance"),
        dct["description"],
        dct["date"],
        dct.get("cost"),
        dct.get("state") or "scheduled",
    )


def _vehicle_to_dict(record: VehicleRecord) -> Dict[str, Any]:
    """Serialize a VehicleRecord to the YAML dict format (camelCase keys)."""
    status = record.status
    if isinstance(status, VehicleStatus):
        status = status.value
    d: Dict[str, Any] = {"id": record.vehicle_id, "status": status}
    for key, attr in _VEHICLE_FIELDS.items():
        value = getattr(record, attr)
        if value is not None:
            d[key] = value
    d.update(record.extra)
    return d


def _driver_to_dict(driver: Driver) -> Dict[str, Any]:
    d: Dict[str, Any] = {"id": driver.driver_id, "name": driver.name}
    if driver.license_number is not None:
        d["licenseNumber"] = driver.license_number
    if driver.license_category is not None:
        d["licenseCategory"] = driver.license_category
    if driver.license_expiry is not None:
        d["licenseExpiry"] = driver.license_expiry
    if driver.status is not None:
        d["status"] = driver.status
    if driver.safety_score is not None:
        d["safetyScore"] = driver.safety_score
    return d


def _fuel_log_to_dict(log: FuelLog) -> Dict[str, Any]:
    d: Dict[str, Any] = {"vehicleId": log.vehicle_id, "date": log.date, "liters": log.liters}
    if log.cost is not None:
        d["cost"] = log.cost
    if log.odometer is not None:
        d["odometer"] = log.odometer
    return d


def _maintenance_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "vehicleId": record.vehicle_id,
        "description": record.description,
        "date": record.date,
        "state": record.state,
    }
    if record.cost is not None:
        d["cost"] = record.cost
    return d


def _read_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _find_vehicle_index(vehicles: List[Dict[str, Any]], vehicle_id: str) -> int:
    for index, dct in enumerate(vehicles):
        if dct.get("id") is not None and str(dct["id"]) == vehicle_id:
            return index
    raise KeyError(f"Vehicle {vehicle_id!r} not found")


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """
    Load a fleet from a YAML file.

    Vehicle statuses are kept as raw values; nothing is validated here.
    """
    data = _read_raw(filename)
    fleet = Fleet(
        vehicles=[_parse_vehicle(d) for d in data.get("vehicles") or []],
        drivers=[_parse_driver(d) for d in data.get("drivers") or []],
        fuel_logs=[_parse_fuel_log(d) for d in data.get("fuelLogs") or []],
        maintenance=[_parse_maintenance(d) for d in data.get("maintenance") or []],
    )
    logger.debug("Loaded %d vehicles from %s", len(fleet.vehicles), filename)
    return fleet


def create_fleet(filename: Union[str, Path]) -> None:
    """Create an empty fleet file."""
    _write_raw(
        filename,
        {"vehicles": [], "drivers": [], "fuelLogs": [], "maintenance": []},
    )


def _has_id(entries: List[Dict[str, Any]], key: str, value: str) -> bool:
    return any(d.get(key) is not None and str(d[key]) == value for d in entries)


def save_vehicle(filename: Union[str, Path], record: VehicleRecord) -> None:
    """
    Append a vehicle to a fleet YAML file.

    Raises ValueError if the id is empty or a vehicle with the same id
    already exists.
    """
    if not record.vehicle_id:
        raise ValueError("Vehicle id is required")

    data = _read_raw(filename)
    if data.get("vehicles") is None:
        data["vehicles"] = []

    if _has_id(data["vehicles"], "id", record.vehicle_id):
        raise ValueError(f"Vehicle {record.vehicle_id!r} already exists")

    data["vehicles"].append(_vehicle_to_dict(record))
    _write_raw(filename, data)
    logger.debug("Added vehicle %s to %s", record.vehicle_id, filename)


def update_vehicle_status(
    filename: Union[str, Path], vehicle_id: str, status: Union[str, VehicleStatus]
) -> None:
    """
    Set the status of a vehicle in a fleet YAML file.

    The new status must be canonical (ClassificationError otherwise);
    an unknown vehicle id raises KeyError.
    """
    new_status = parse_status(status, vehicle_id)
    data = _read_raw(filename)
    vehicles = data.get("vehicles") or []
    index = _find_vehicle_index(vehicles, vehicle_id)
    vehicles[index]["status"] = new_status.value
    _write_raw(filename, data)
    logger.debug("Vehicle %s status -> %s", vehicle_id, new_status.value)


def retire_vehicle(filename: Union[str, Path], vehicle_id: str) -> None:
    """Soft-delete a vehicle by marking it retired."""
    update_vehicle_status(filename, vehicle_id, VehicleStatus.RETIRED)


def delete_vehicle(filename: Union[str, Path], vehicle_id: str) -> None:
    """Remove a vehicle from a fleet YAML file."""
    data = _read_raw(filename)
    vehicles = data.get("vehicles") or []
    index = _find_vehicle_index(vehicles, vehicle_id)
    del vehicles[index]
    _write_raw(filename, data)


def save_driver(filename: Union[str, Path], driver: Driver) -> None:
    """
    Append a driver to a fleet YAML file.

    Raises ValueError if the id is empty or already taken.
    """
    if not driver.driver_id:
        raise ValueError("Driver id is required")

    data = _read_raw(filename)
    if data.get("drivers") is None:
        data["drivers"] = []

    if _has_id(data["drivers"], "id", driver.driver_id):
        raise ValueError(f"Driver {driver.driver_id!r} already exists")

    data["drivers"].append(_driver_to_dict(driver))
    _write_raw(filename, data)


def save_fuel_log(filename: Union[str, Path], log: FuelLog) -> None:
    """
    Append a fuel log to a fleet YAML file.

    The vehicle must exist (KeyError otherwise).
    """
    data = _read_raw(filename)
    _find_vehicle_index(data.get("vehicles") or [], log.vehicle_id)

    if data.get("fuelLogs") is None:
        data["fuelLogs"] = []
    data["fuelLogs"].append(_fuel_log_to_dict(log))
    _write_raw(filename, data)


def save_maintenance_record(
    filename: Union[str, Path], record: MaintenanceRecord
) -> None:
    """
    Append a maintenance record to a fleet YAML file.

    The vehicle must exist (KeyError otherwise). Logging open work sends
    the vehicle to the shop; a record logged as already done leaves the
    vehicle's status alone.
    """
    data = _read_raw(filename)
    vehicles = data.get("vehicles") or []
    index = _find_vehicle_index(vehicles, record.vehicle_id)

    if data.get("maintenance") is None:
        data["maintenance"] = []
    data["maintenance"].append(_maintenance_to_dict(record))

    if record.is_open:
        vehicles[index]["status"] = VehicleStatus.IN_SHOP.value
    _write_raw(filename, data)
    logger.debug("Logged maintenance for %s: %s", record.vehicle_id, record.description)


def complete_maintenance(filename: Union[str, Path], index: int) -> bool:
    """
    Mark the maintenance record at `index` as done.

    The vehicle goes back to available only when it is in the shop and
    has no other open maintenance records.

    Raises IndexError for an out-of-range index and ValueError if the
    record is already done.

    Returns:
        True if the vehicle was released from the shop
    """
    data = _read_raw(filename)
    records = data.get("maintenance") or []
    if index < 0 or index >= len(records):
        raise IndexError(f"Maintenance index {index} out of range (0..{len(records) - 1})")

    entry = records[index]
    if entry.get("state") == "done":
        raise ValueError(f"Maintenance record {index} is already done")
    entry["state"] = "done"

    vehicle_id = str(entry["vehicleId"])
    still_open = any(
        i != index
        and str(r.get("vehicleId")) == vehicle_id
        and (r.get("state") or "scheduled") != "done"
        for i, r in enumerate(records)
    )

    released = False
    vehicles = data.get("vehicles") or []
    if not still_open:
        for vehicle in vehicles:
            if (
                _has_id([vehicle], "id", vehicle_id)
                and vehicle.get("status") == VehicleStatus.IN_SHOP.value
            ):
                vehicle["status"] = VehicleStatus.AVAILABLE.value
                released = True

    _write_raw(filename, data)
    logger.debug("Completed maintenance %d for %s (released=%s)", index, vehicle_id, released)
    return released
