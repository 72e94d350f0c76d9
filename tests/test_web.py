#!/usr/bin/env python3
"""Tests for the Flask dashboard."""

import pytest

from web.app import app

FLEET_YAML = """
vehicles:
  - id: VH-001
    name: Tata Ace
    status: on_trip
  - id: VH-002
    status: available
  - id: VH-003
    status: available
drivers:
  - id: DR-001
    name: Ramesh Patel
    status: on_duty
  - id: DR-002
    name: Sunita Shah
    status: off_duty
fuelLogs:
  - vehicleId: VH-001
    date: '2026-10-02'
    liters: 60
    cost: 5640
  - vehicleId: VH-002
    date: '2026-10-03'
    liters: 35.5
maintenance:
  - vehicleId: VH-003
    description: Brake pads
    date: '2026-10-10'
    state: done
"""


@pytest.fixture
def client(tmp_path):
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    app.config.update(TESTING=True, FLEET_FILE=path, PRESENTATION_FILE=None)
    with app.test_client() as client:
        yield client


def write_fleet(text):
    app.config["FLEET_FILE"].write_text(text)


class TestFleetStatusApi:
    """Tests for /api/fleet/status."""

    def test_returns_groups_and_utilization(self, client):
        resp = client.get("/api/fleet/status")
        assert resp.status_code == 200
        assert resp.get_json() == {
            "statusGroups": [
                {"status": "on_trip", "label": "On Trip", "color": "#38bdf8", "value": 1},
                {"status": "available", "label": "Available", "color": "#22C55E", "value": 2},
            ],
            "utilization": 33,
        }

    def test_presentation_file(self, client, tmp_path):
        overrides = tmp_path / "presentation.yaml"
        overrides.write_text("available:\n  color: green\n")
        app.config["PRESENTATION_FILE"] = str(overrides)
        data = client.get("/api/fleet/status").get_json()
        assert data["statusGroups"][1]["color"] == "green"

    def test_bad_status_is_422(self, client):
        write_fleet("vehicles:\n  - id: VH-009\n    status: parked\n")
        resp = client.get("/api/fleet/status")
        assert resp.status_code == 422
        data = resp.get_json()
        assert data["vehicleId"] == "VH-009"
        assert data["status"] == "parked"

    def test_empty_fleet(self, client):
        write_fleet("vehicles: []\n")
        assert client.get("/api/fleet/status").get_json() == {
            "statusGroups": [],
            "utilization": 0,
        }

    def test_bad_presentation_file_is_500(self, client, tmp_path):
        overrides = tmp_path / "presentation.yaml"
        overrides.write_text("on_trip: red\n")
        app.config["PRESENTATION_FILE"] = str(overrides)
        resp = client.get("/api/fleet/status")
        assert resp.status_code == 500
        assert "on_trip" in resp.get_json()["error"]


class TestVehiclesApi:
    """Tests for /api/vehicles."""

    def test_lists_vehicles(self, client):
        data = client.get("/api/vehicles").get_json()
        assert [v["id"] for v in data] == ["VH-001", "VH-002", "VH-003"]
        assert data[0]["name"] == "Tata Ace"

    def test_status_filter(self, client):
        data = client.get("/api/vehicles?status=available").get_json()
        assert [v["id"] for v in data] == ["VH-002", "VH-003"]


class TestDashboardPage:
    """Tests for the dashboard page."""

    def test_renders_utilization(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert "33%" in html
        assert "On Trip" in html
        assert "VH-003" in html

    def test_bad_status_shows_error_state(self, client):
        write_fleet("vehicles:\n  - id: VH-009\n    status: parked\n")
        resp = client.get("/")
        assert resp.status_code == 422
        assert "Could not compute fleet status" in resp.get_data(as_text=True)

    def test_shows_on_trip_and_in_shop_counts(self, client):
        write_fleet(
            "vehicles:\n"
            "  - id: VH-001\n    status: on_trip\n"
            "  - id: VH-002\n    status: in_shop\n"
            "  - id: VH-003\n    status: in_shop\n"
        )
        html = client.get("/").get_data(as_text=True)
        assert "<dt>On Trip</dt><dd>1</dd>" in html
        assert "<dt>In Shop</dt><dd>2</dd>" in html

    def test_bad_presentation_file_shows_error_state(self, client, tmp_path):
        overrides = tmp_path / "presentation.yaml"
        overrides.write_text("on_trip:\n")
        app.config["PRESENTATION_FILE"] = str(overrides)
        resp = client.get("/")
        assert resp.status_code == 500
        assert "Invalid presentation file" in resp.get_data(as_text=True)


class TestDriversApi:
    """Tests for /api/drivers."""

    def test_lists_drivers(self, client):
        data = client.get("/api/drivers").get_json()
        assert [d["id"] for d in data] == ["DR-001", "DR-002"]
        assert data[0]["name"] == "Ramesh Patel"

    def test_status_filter(self, client):
        data = client.get("/api/drivers?status=off_duty").get_json()
        assert [d["id"] for d in data] == ["DR-002"]


class TestFuelApi:
    """Tests for /api/fuel."""

    def test_lists_all_logs(self, client):
        data = client.get("/api/fuel").get_json()
        assert [f["vehicleId"] for f in data] == ["VH-001", "VH-002"]

    def test_vehicle_filter(self, client):
        data = client.get("/api/fuel?vehicle=VH-002").get_json()
        assert data == [
            {
                "vehicleId": "VH-002",
                "date": "2026-10-03",
                "liters": 35.5,
                "cost": None,
                "odometer": None,
            }
        ]

    def test_unknown_vehicle_is_404(self, client):
        assert client.get("/api/fuel?vehicle=VH-999").status_code == 404


class TestMaintenanceApi:
    """Tests for /api/maintenance."""

    def test_vehicle_filter(self, client):
        assert client.get("/api/maintenance?vehicle=VH-001").get_json() == []
        data = client.get("/api/maintenance?vehicle=VH-003").get_json()
        assert data[0]["description"] == "Brake pads"
        assert data[0]["state"] == "done"
