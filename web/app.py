"""Flask web application for the fleet dashboard."""

import os
from pathlib import Path

from flask import Flask, flash, jsonify, render_template, request

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleetflow import (
    ClassificationError,
    FleetStatus,
    PresentationError,
    StatusPresentation,
    VehicleStatus,
    load_fleet,
    load_presentation,
)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Fleet file (relative to project root unless overridden)
app.config["FLEET_FILE"] = Path(
    os.environ.get(
        "FLEETFLOW_FILE", Path(__file__).parent.parent / "data" / "fleet.yaml"
    )
)
app.config["PRESENTATION_FILE"] = os.environ.get("FLEETFLOW_PRESENTATION") or None


def get_presentation() -> StatusPresentation:
    """Status labels/colors, from the override file if one is configured."""
    path = app.config.get("PRESENTATION_FILE")
    if path:
        return load_presentation(path)
    return StatusPresentation.default()


def format_number(value):
    """Format a number with comma separator."""
    if value is None:
        return "—"
    return f"{value:,.0f}"


app.jinja_env.filters["format_number"] = format_number
app.jinja_env.globals["VehicleStatus"] = VehicleStatus


@app.errorhandler(ClassificationError)
def handle_classification_error(error: ClassificationError):
    """Bad vehicle status: 422 for the API, error state for the dashboard."""
    app.logger.error("Fleet status aggregation failed: %s", error)
    if request.path.startswith("/api/"):
        return (
            jsonify(
                {
                    "error": str(error),
                    "vehicleId": error.vehicle_id,
                    "status": error.raw_status,
                }
            ),
            422,
        )
    flash(f"Could not compute fleet status: {error}", "error")
    return render_template("index.html", summary=FleetStatus(), vehicles=[]), 422


@app.errorhandler(PresentationError)
def handle_presentation_error(error: PresentationError):
    """Broken label/color override file: 500 for the API, error state for the dashboard."""
    app.logger.error(
        "Invalid presentation file %s: %s", app.config.get("PRESENTATION_FILE"), error
    )
    if request.path.startswith("/api/"):
        return jsonify({"error": f"Invalid presentation file: {error}"}), 500
    flash(f"Invalid presentation file: {error}", "error")
    return render_template("index.html", summary=FleetStatus(), vehicles=[]), 500


@app.route("/")
def index():
    """Dashboard: fleet health donut and vehicle list."""
    fleet = load_fleet(app.config["FLEET_FILE"])
    summary = fleet.status_summary(get_presentation())
    return render_template("index.html", summary=summary, vehicles=fleet.vehicles)


@app.route("/api/fleet/status")
def fleet_status():
    """Donut chart data: status groups and utilization."""
    fleet = load_fleet(app.config["FLEET_FILE"])
    summary = fleet.status_summary(get_presentation())
    return jsonify(summary.to_dict())


@app.route("/api/vehicles")
def vehicles():
    """Vehicle list, optionally filtered with ?status=."""
    fleet = load_fleet(app.config["FLEET_FILE"])
    status_filter = request.args.get("status") or None

    records = fleet.vehicles
    if status_filter:
        records = fleet.vehicles_with_status(status_filter)

    return jsonify(
        [
            {
                "id": v.vehicle_id,
                "name": v.name,
                "model": v.model,
                "licensePlate": v.license_plate,
                "type": v.vehicle_type,
                "status": v.status,
                "odometer": v.odometer,
                "driverId": v.driver_id,
            }
            for v in records
        ]
    )


@app.route("/api/drivers")
def drivers():
    """Driver profiles, optionally filtered with ?status=."""
    fleet = load_fleet(app.config["FLEET_FILE"])
    status_filter = request.args.get("status") or None

    records = fleet.drivers
    if status_filter:
        records = [d for d in records if d.status == status_filter]

    return jsonify(
        [
            {
                "id": d.driver_id,
                "name": d.name,
                "licenseNumber": d.license_number,
                "licenseCategory": d.license_category,
                "licenseExpiry": d.license_expiry,
                "status": d.status,
                "safetyScore": d.safety_score,
            }
            for d in records
        ]
    )


@app.route("/api/fuel")
def fuel_logs():
    """Fuel logs, optionally for one vehicle with ?vehicle=."""
    fleet = load_fleet(app.config["FLEET_FILE"])
    vehicle_id = request.args.get("vehicle") or None

    if vehicle_id and fleet.get_vehicle(vehicle_id) is None:
        return jsonify({"error": f"Unknown vehicle '{vehicle_id}'"}), 404

    logs = fleet.fuel_logs_for(vehicle_id) if vehicle_id else fleet.fuel_logs
    return jsonify(
        [
            {
                "vehicleId": log.vehicle_id,
                "date": log.date,
                "liters": log.liters,
                "cost": log.cost,
                "odometer": log.odometer,
            }
            for log in logs
        ]
    )


@app.route("/api/maintenance")
def maintenance():
    """Maintenance records, optionally for one vehicle with ?vehicle=."""
    fleet = load_fleet(app.config["FLEET_FILE"])
    vehicle_id = request.args.get("vehicle") or None

    records = fleet.maintenance_for(vehicle_id) if vehicle_id else fleet.maintenance
    return jsonify(
        [
            {
                "vehicleId": m.vehicle_id,
                "description": m.description,
                "date": m.date,
                "cost": m.cost,
                "state": m.state,
            }
            for m in records
        ]
    )


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
