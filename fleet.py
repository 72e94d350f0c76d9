#!/usr/bin/env python3
"""
Unified CLI for fleet record keeping.

Commands:
  status       - Show vehicles per status and fleet utilization
  vehicles     - List vehicle records
  add-vehicle  - Add a new vehicle
  set-status   - Change a vehicle's status
  retire       - Mark a vehicle as retired
  remove       - Delete a vehicle record
  drivers      - List driver profiles
  add-driver   - Add a new driver
  fuel         - List fuel logs
  log-fuel     - Record fuel added to a vehicle
  maintenance  - List maintenance records
  log-maintenance      - Record maintenance work (sends the vehicle to the shop)
  complete-maintenance - Mark maintenance work done
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleetflow import (
    ClassificationError,
    Driver,
    FleetStatus,
    FuelLog,
    MaintenanceRecord,
    PresentationError,
    StatusPresentation,
    VehicleRecord,
    VehicleStatus,
    load_fleet,
    load_presentation,
    save_vehicle,
    update_vehicle_status,
    retire_vehicle,
    delete_vehicle,
    save_driver,
    save_fuel_log,
    save_maintenance_record,
    complete_maintenance,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_number(value: Optional[float]) -> str:
    """Format a number (km, kg) for display."""
    return f"{value:,.0f}" if value is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"{cost:,.2f}" if cost is not None else "-"


def format_status(status) -> str:
    """Format a raw status value for display."""
    if status is None:
        return "(missing)"
    return str(status)


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Status command
# =============================================================================


def make_status_table(summary: FleetStatus) -> List[List[str]]:
    """Convert status groups to table rows."""
    total = summary.total
    rows = []
    for group in summary.status_groups:
        share = f"{group.value / total * 100:.0f}%" if total else "-"
        rows.append([group.label, str(group.value), share, group.color])
    return rows


def cmd_status(args):
    """Show vehicles per status and fleet utilization."""
    fleet = load_fleet(args.fleet_file)
    presentation = StatusPresentation.default()
    if args.presentation:
        try:
            presentation = load_presentation(args.presentation)
        except (PresentationError, OSError) as e:
            print(f"Error: {args.presentation}: {e}")
            return 1

    try:
        summary = fleet.status_summary(presentation)
    except ClassificationError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
        return 0

    print(f"Vehicles: {summary.total}")
    print(f"Utilization: {summary.utilization}% active")
    print(
        f"On trip: {summary.count(VehicleStatus.ON_TRIP)}, "
        f"in shop: {summary.count(VehicleStatus.IN_SHOP)}"
    )
    print()

    if not summary.status_groups:
        print("No vehicles found.")
        return 0

    headers = ["Status", "Vehicles", "Share", "Color"]
    print(tabulate(make_status_table(summary), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Vehicles command
# =============================================================================


def make_vehicle_table(vehicles: List[VehicleRecord]) -> List[List[str]]:
    """Convert vehicle records to table rows."""
    rows = []
    for v in vehicles:
        rows.append(
            [
                v.vehicle_id,
                truncate(v.name),
                v.license_plate or "-",
                v.vehicle_type or "-",
                format_status(v.status),
                format_number(v.odometer),
            ]
        )
    return rows


def cmd_vehicles(args):
    """List vehicle records."""
    fleet = load_fleet(args.fleet_file)

    vehicles = fleet.vehicles
    if args.status:
        vehicles = fleet.vehicles_with_status(args.status)

    print(f"Total vehicles: {len(fleet.vehicles)}")
    if args.status:
        print(f"Showing: {len(vehicles)} (status = {args.status})")
    print()

    if not vehicles:
        print("No vehicles found.")
        return 0

    headers = ["ID", "Name", "Plate", "Type", "Status", "Odometer (km)"]
    print(tabulate(make_vehicle_table(vehicles), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Edit commands
# =============================================================================


def cmd_add_vehicle(args):
    """Add a new vehicle."""
    driver = None
    if args.driver:
        driver = load_fleet(args.fleet_file).get_driver(args.driver)
        if driver is None:
            print(f"Error: Unknown driver '{args.driver}'")
            return 1

    record = VehicleRecord(
        vehicle_id=args.vehicle_id,
        status=args.status,
        name=args.name,
        model=args.model,
        license_plate=args.plate,
        vehicle_type=args.type,
        max_capacity=args.capacity,
        odometer=args.odometer,
        region=args.region,
        driver_id=args.driver,
    )

    print(f"Adding vehicle to {args.fleet_file}:")
    print(f"  ID:      {record.vehicle_id}")
    print(f"  Name:    {record.display_name}")
    print(f"  Status:  {record.status}")
    if record.model:
        print(f"  Model:   {record.model}")
    if record.odometer is not None:
        print(f"  Odometer: {record.odometer:,.0f}")
    if driver is not None:
        print(f"  Driver:  {driver.name} ({driver.driver_id})")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        save_vehicle(args.fleet_file, record)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print("Vehicle saved.")

    return 0


def cmd_set_status(args):
    """Change a vehicle's status."""
    fleet = load_fleet(args.fleet_file)
    vehicle = fleet.get_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        return 1

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Current status: {format_status(vehicle.status)}")
    print(f"New status:     {args.status}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    update_vehicle_status(args.fleet_file, args.vehicle_id, args.status)
    print("Status updated.")

    return 0


def cmd_retire(args):
    """Mark a vehicle as retired."""
    fleet = load_fleet(args.fleet_file)
    vehicle = fleet.get_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        return 1

    print(f"Retiring: {vehicle.display_name}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    retire_vehicle(args.fleet_file, args.vehicle_id)
    print("Vehicle marked as retired.")

    return 0


def cmd_remove(args):
    """Delete a vehicle record."""
    fleet = load_fleet(args.fleet_file)
    vehicle = fleet.get_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        return 1

    print(f"Removing: {vehicle.display_name}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_vehicle(args.fleet_file, args.vehicle_id)
    print("Vehicle removed.")

    return 0


# =============================================================================
# Driver commands
# =============================================================================


def make_driver_table(drivers: List[Driver]) -> List[List[str]]:
    """Convert driver profiles to table rows."""
    rows = []
    for d in drivers:
        rows.append(
            [
                d.driver_id,
                truncate(d.name),
                d.license_category or "-",
                d.license_expiry or "-",
                d.status or "-",
                format_number(d.safety_score),
            ]
        )
    return rows


def cmd_drivers(args):
    """List driver profiles."""
    fleet = load_fleet(args.fleet_file)

    drivers = fleet.drivers
    if args.status:
        drivers = [d for d in drivers if d.status == args.status]

    print(f"Total drivers: {len(fleet.drivers)}")
    if args.status:
        print(f"Showing: {len(drivers)} (status = {args.status})")
    print()

    if not drivers:
        print("No drivers found.")
        return 0

    headers = ["ID", "Name", "Category", "License Expiry", "Status", "Safety"]
    print(tabulate(make_driver_table(drivers), headers=headers, tablefmt="simple"))

    return 0


def cmd_add_driver(args):
    """Add a new driver."""
    driver = Driver(
        driver_id=args.driver_id,
        name=args.name,
        license_number=args.license,
        license_category=args.category,
        license_expiry=args.expiry,
        status=args.status,
    )

    print(f"Adding driver to {args.fleet_file}:")
    print(f"  ID:      {driver.driver_id}")
    print(f"  Name:    {driver.name}")
    if driver.license_number:
        print(f"  License: {driver.license_number}")
    if driver.license_expiry:
        print(f"  Expires: {driver.license_expiry}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        save_driver(args.fleet_file, driver)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print("Driver saved.")

    return 0


# =============================================================================
# Fuel commands
# =============================================================================


def make_fuel_table(logs: List[FuelLog]) -> List[List[str]]:
    """Convert fuel logs to table rows."""
    return [
        [
            log.date,
            log.vehicle_id,
            f"{log.liters:,.1f}",
            format_cost(log.cost),
            format_number(log.odometer),
        ]
        for log in logs
    ]


def cmd_fuel(args):
    """List fuel logs."""
    fleet = load_fleet(args.fleet_file)

    logs = fleet.fuel_logs
    if args.vehicle:
        logs = fleet.fuel_logs_for(args.vehicle)
    logs = sorted(logs, key=lambda log: str(log.date), reverse=True)

    total_liters = sum(log.liters for log in logs)
    total_cost = sum(log.cost for log in logs if log.cost is not None)

    print(f"Fuel logs: {len(logs)}")
    if args.vehicle:
        print(f"Vehicle: {args.vehicle}")
    if logs:
        print(f"Total: {total_liters:,.1f} L, cost {total_cost:,.2f}")
    print()

    if not logs:
        print("No fuel logs found.")
        return 0

    headers = ["Date", "Vehicle", "Liters", "Cost", "Odometer (km)"]
    print(tabulate(make_fuel_table(logs), headers=headers, tablefmt="simple"))

    return 0


def cmd_log_fuel(args):
    """Record fuel added to a vehicle."""
    log = FuelLog(
        vehicle_id=args.vehicle_id,
        date=args.date or date.today().isoformat(),
        liters=args.liters,
        cost=args.cost,
        odometer=args.odometer,
    )

    print(f"Adding fuel log to {args.fleet_file}:")
    print(f"  Vehicle: {log.vehicle_id}")
    print(f"  Date:    {log.date}")
    print(f"  Liters:  {log.liters:,.1f}")
    if log.cost is not None:
        print(f"  Cost:    {format_cost(log.cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        save_fuel_log(args.fleet_file, log)
    except KeyError:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        return 1
    print("Fuel log saved.")

    return 0


# =============================================================================
# Maintenance commands
# =============================================================================


def make_maintenance_table(
    entries: List[MaintenanceRecord], indices: List[int]
) -> List[List[str]]:
    """Convert maintenance records to table rows, keyed by file index."""
    return [
        [
            str(index),
            m.date,
            m.vehicle_id,
            truncate(m.description),
            m.state,
            format_cost(m.cost),
        ]
        for index, m in zip(indices, entries)
    ]


def cmd_maintenance(args):
    """List maintenance records."""
    fleet = load_fleet(args.fleet_file)

    # Keep file positions; complete-maintenance takes them as its argument
    indexed = list(enumerate(fleet.maintenance))
    if args.vehicle:
        wanted = fleet.maintenance_for(args.vehicle)
        indexed = [(i, m) for i, m in indexed if m in wanted]
    if args.open:
        indexed = [(i, m) for i, m in indexed if m.is_open]

    print(f"Maintenance records: {len(fleet.maintenance)}")
    if args.vehicle or args.open:
        print(f"Showing: {len(indexed)} (filtered)")
    print()

    if not indexed:
        print("No maintenance records found.")
        return 0

    headers = ["#", "Date", "Vehicle", "Description", "State", "Cost"]
    rows = make_maintenance_table([m for _, m in indexed], [i for i, _ in indexed])
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    return 0


def cmd_log_maintenance(args):
    """Record maintenance work on a vehicle."""
    fleet = load_fleet(args.fleet_file)
    vehicle = fleet.get_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        return 1

    record = MaintenanceRecord(
        vehicle_id=args.vehicle_id,
        description=args.description,
        date=args.date or date.today().isoformat(),
        cost=args.cost,
        state=args.state,
    )

    print(f"Adding maintenance record to {args.fleet_file}:")
    print(f"  Vehicle: {vehicle.display_name}")
    print(f"  Work:    {record.description}")
    print(f"  Date:    {record.date}")
    print(f"  State:   {record.state}")
    if record.cost is not None:
        print(f"  Cost:    {format_cost(record.cost)}")
    if record.is_open:
        print(f"  Status:  {format_status(vehicle.status)} -> {VehicleStatus.IN_SHOP.value}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_maintenance_record(args.fleet_file, record)
    print("Maintenance record saved.")

    return 0


def cmd_complete_maintenance(args):
    """Mark maintenance work done."""
    fleet = load_fleet(args.fleet_file)
    if args.index < 0 or args.index >= len(fleet.maintenance):
        print(f"Error: No maintenance record #{args.index}")
        return 1

    record = fleet.maintenance[args.index]
    print(f"Completing: {record.description} ({record.vehicle_id}, {record.date})")
    if not record.is_open:
        print(f"Error: Maintenance record #{args.index} is already done")
        return 1

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    released = complete_maintenance(args.fleet_file, args.index)
    print("Maintenance marked as done.")
    if released:
        print(f"Vehicle {record.vehicle_id} is available again.")

    return 0


# =============================================================================
# Main
# =============================================================================


STATUS_CHOICES = [s.value for s in VehicleStatus]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet record keeping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/fleet.yaml status
  %(prog)s data/fleet.yaml status --json
  %(prog)s data/fleet.yaml vehicles --status in_shop
  %(prog)s data/fleet.yaml add-vehicle VH-009 --name "Tata Ace" --plate GJ01AB1234
  %(prog)s data/fleet.yaml set-status VH-009 on_trip
  %(prog)s data/fleet.yaml retire VH-009
  %(prog)s data/fleet.yaml log-fuel VH-002 60 --cost 5640
  %(prog)s data/fleet.yaml log-maintenance VH-005 "Brake pads" --cost 3500
  %(prog)s data/fleet.yaml maintenance --open
  %(prog)s data/fleet.yaml complete-maintenance 2
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show vehicles per status and fleet utilization"
    )
    status_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the dashboard data as JSON",
    )
    status_parser.add_argument(
        "--presentation",
        type=Path,
        help="YAML file overriding status labels/colors",
    )

    # Vehicles subcommand
    vehicles_parser = subparsers.add_parser("vehicles", help="List vehicle records")
    vehicles_parser.add_argument(
        "--status",
        type=str,
        help="Only show vehicles with this status",
    )

    # Add vehicle subcommand
    add_parser = subparsers.add_parser("add-vehicle", help="Add a new vehicle")
    add_parser.add_argument("vehicle_id", type=str, help="Vehicle ID (e.g., 'VH-009')")
    add_parser.add_argument("--name", type=str, required=True, help="Vehicle name")
    add_parser.add_argument("--model", type=str, help="Vehicle model")
    add_parser.add_argument("--plate", type=str, help="License plate")
    add_parser.add_argument(
        "--type", type=str, help="Vehicle type (e.g., 'truck', 'van', 'bike')"
    )
    add_parser.add_argument("--capacity", type=float, help="Max load capacity (kg)")
    add_parser.add_argument("--odometer", type=float, help="Odometer reading (km)")
    add_parser.add_argument("--region", type=str, help="Operating region")
    add_parser.add_argument("--driver", type=str, help="Assigned driver ID")
    add_parser.add_argument(
        "--status",
        choices=STATUS_CHOICES,
        default="available",
        help="Initial status (default: available)",
    )
    add_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Set status subcommand
    set_status_parser = subparsers.add_parser(
        "set-status", help="Change a vehicle's status"
    )
    set_status_parser.add_argument("vehicle_id", type=str, help="Vehicle ID")
    set_status_parser.add_argument("status", choices=STATUS_CHOICES, help="New status")
    set_status_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Retire / remove subcommands
    for name, help_text in (
        ("retire", "Mark a vehicle as retired"),
        ("remove", "Delete a vehicle record"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("vehicle_id", type=str, help="Vehicle ID")
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would change without saving",
        )

    # Drivers subcommand
    drivers_parser = subparsers.add_parser("drivers", help="List driver profiles")
    drivers_parser.add_argument(
        "--status",
        type=str,
        help="Only show drivers with this status (e.g., 'on_duty')",
    )

    # Add driver subcommand
    add_driver_parser = subparsers.add_parser("add-driver", help="Add a new driver")
    add_driver_parser.add_argument("driver_id", type=str, help="Driver ID (e.g., 'DR-003')")
    add_driver_parser.add_argument("--name", type=str, required=True, help="Driver name")
    add_driver_parser.add_argument("--license", type=str, help="License number")
    add_driver_parser.add_argument(
        "--category", type=str, help="License category (e.g., 'truck', 'van')"
    )
    add_driver_parser.add_argument(
        "--expiry", type=str, help="License expiry date (YYYY-MM-DD)"
    )
    add_driver_parser.add_argument(
        "--status", type=str, default="off_duty", help="Duty status (default: off_duty)"
    )
    add_driver_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Fuel subcommands
    fuel_parser = subparsers.add_parser("fuel", help="List fuel logs")
    fuel_parser.add_argument("--vehicle", type=str, help="Only show this vehicle")

    log_fuel_parser = subparsers.add_parser(
        "log-fuel", help="Record fuel added to a vehicle"
    )
    log_fuel_parser.add_argument("vehicle_id", type=str, help="Vehicle ID")
    log_fuel_parser.add_argument("liters", type=float, help="Liters added")
    log_fuel_parser.add_argument(
        "--date", type=str, help="Date (YYYY-MM-DD), defaults to today"
    )
    log_fuel_parser.add_argument("--cost", type=float, help="Total cost")
    log_fuel_parser.add_argument("--odometer", type=float, help="Odometer reading (km)")
    log_fuel_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Maintenance subcommands
    maintenance_parser = subparsers.add_parser(
        "maintenance", help="List maintenance records"
    )
    maintenance_parser.add_argument("--vehicle", type=str, help="Only show this vehicle")
    maintenance_parser.add_argument(
        "--open",
        action="store_true",
        help="Only show work that is not done yet",
    )

    log_maint_parser = subparsers.add_parser(
        "log-maintenance", help="Record maintenance work (sends the vehicle to the shop)"
    )
    log_maint_parser.add_argument("vehicle_id", type=str, help="Vehicle ID")
    log_maint_parser.add_argument("description", type=str, help="Work performed")
    log_maint_parser.add_argument(
        "--date", type=str, help="Date (YYYY-MM-DD), defaults to today"
    )
    log_maint_parser.add_argument("--cost", type=float, help="Cost of the work")
    log_maint_parser.add_argument(
        "--state",
        choices=["scheduled", "in_progress", "done"],
        default="scheduled",
        help="Work state (default: scheduled)",
    )
    log_maint_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    complete_parser = subparsers.add_parser(
        "complete-maintenance", help="Mark maintenance work done"
    )
    complete_parser.add_argument(
        "index", type=int, help="Record number, as shown by 'maintenance'"
    )
    complete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without saving",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    # Dispatch to command handler
    if args.command == "status":
        return cmd_status(args)
    elif args.command == "vehicles":
        return cmd_vehicles(args)
    elif args.command == "add-vehicle":
        return cmd_add_vehicle(args)
    elif args.command == "set-status":
        return cmd_set_status(args)
    elif args.command == "retire":
        return cmd_retire(args)
    elif args.command == "remove":
        return cmd_remove(args)
    elif args.command == "drivers":
        return cmd_drivers(args)
    elif args.command == "add-driver":
        return cmd_add_driver(args)
    elif args.command == "fuel":
        return cmd_fuel(args)
    elif args.command == "log-fuel":
        return cmd_log_fuel(args)
    elif args.command == "maintenance":
        return cmd_maintenance(args)
    elif args.command == "log-maintenance":
        return cmd_log_maintenance(args)
    elif args.command == "complete-maintenance":
        return cmd_complete_maintenance(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
