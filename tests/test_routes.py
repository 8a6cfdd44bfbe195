"""API tests against the Flask test client (in-memory SQLite)."""

import io
from unittest.mock import patch

import pandas as pd
import pytest

from energywise.errors import GenerationFailed, PersistFailed
from energywise.utils.recommendations import SavingsSuggestion


def test_household_defaults_to_demo_data(client):
    response = client.get("/api/household")

    assert response.status_code == 200
    data = response.get_json()
    assert data["household"]["costPerKWh"] == 0.75
    assert [r["name"] for r in data["household"]["rooms"]] == ["Sala de Estar", "Cozinha"]
    assert data["totals"]["dailyKWh"] == pytest.approx(16.15)


def test_consumption_summary(client):
    data = client.get("/api/consumption").get_json()

    assert data["status"] == "success"
    assert data["totals"]["monthlyKWh"] == pytest.approx(16.15 * 30.44)
    assert data["cards"][0]["title"] == "Consumo Diário"
    assert data["cards"][0]["formatted"]["kwh"] == "16.15 kWh"
    assert data["topConsumers"][0]["name"] == "Ar Condicionado"
    assert len(data["rooms"]) == 2


def test_set_tariff(client):
    response = client.put("/api/tariff", json={"costPerKWh": 0.92})

    assert response.status_code == 200
    assert client.get("/api/household").get_json()["household"]["costPerKWh"] == 0.92


def test_set_tariff_rejects_text(client):
    response = client.put("/api/tariff", json={"costPerKWh": "cheap"})

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_INPUT"


def test_add_room_and_appliance(client):
    room = client.post("/api/rooms", json={"name": "Quarto"}).get_json()["room"]

    response = client.post(
        f"/api/rooms/{room['id']}/appliances",
        json={"name": "Ventilador", "power": 80, "dailyUsageHours": 10},
    )

    assert response.status_code == 201
    appliance = response.get_json()["appliance"]
    assert appliance["consumption"]["dailyKWh"] == pytest.approx(0.8)
    assert appliance["formatted"]["monthlyKWh"] == "24.35 kWh"

    rooms = client.get("/api/household").get_json()["household"]["rooms"]
    assert rooms[-1]["name"] == "Quarto"
    assert rooms[-1]["appliances"][0]["name"] == "Ventilador"


def test_add_appliance_rejects_more_than_24_hours(client):
    response = client.post(
        "/api/rooms/room-1/appliances",
        json={"name": "Forno", "power": 2000, "dailyUsageHours": 25},
    )

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_INPUT"


def test_add_appliance_requires_json(client):
    response = client.post("/api/rooms/room-1/appliances", data="power=1", content_type="text/plain")

    assert response.status_code == 400


def test_edit_and_delete_appliance(client):
    response = client.put(
        "/api/rooms/room-1/appliances/app-1",
        json={"name": "TV 75\"", "power": 200, "dailyUsageHours": 4},
    )
    assert response.status_code == 200
    assert response.get_json()["appliance"]["power"] == 200

    assert client.delete("/api/rooms/room-1/appliances/app-1").status_code == 200
    ids = [a["id"] for a in client.get("/api/household").get_json()["household"]["rooms"][0]["appliances"]]
    assert "app-1" not in ids


def test_rename_and_delete_room(client):
    assert client.patch("/api/rooms/room-2", json={"name": "Cozinha Nova"}).status_code == 200
    assert client.delete("/api/rooms/room-1").status_code == 200

    rooms = client.get("/api/household").get_json()["household"]["rooms"]
    assert [r["name"] for r in rooms] == ["Cozinha Nova"]


def test_unknown_room_and_appliance(client):
    assert client.delete("/api/rooms/nope").status_code == 404
    response = client.delete("/api/rooms/room-1/appliances/nope")
    assert response.status_code == 404
    assert response.get_json()["code"] == "NOT_FOUND"


def test_replace_household(client):
    snapshot = {
        "rooms": [{"id": "r1", "name": "Escritório", "appliances": [
            {"id": "a1", "name": "PC", "power": 300, "dailyUsageHours": 8},
        ]}],
        "costPerKWh": 0.8,
    }

    assert client.put("/api/household", json=snapshot).status_code == 200

    data = client.get("/api/household").get_json()
    assert data["household"] == snapshot
    assert data["totals"]["dailyKWh"] == pytest.approx(2.4)


def test_replace_household_validates_appliances(client):
    snapshot = {"rooms": [{"id": "r1", "name": "X", "appliances": [
        {"id": "a1", "name": "PC", "power": 300, "dailyUsageHours": 30},
    ]}]}

    assert client.put("/api/household", json=snapshot).status_code == 400


def test_replace_household_rejects_duplicate_ids(client):
    appliance = {"id": "a1", "name": "PC", "power": 300, "dailyUsageHours": 8}
    snapshot = {"rooms": [
        {"id": "r1", "name": "A", "appliances": [appliance, appliance]},
        {"id": "r1", "name": "B"},
    ]}

    response = client.put("/api/household", json=snapshot)

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_INPUT"
    rooms = client.get("/api/household").get_json()["household"]["rooms"]
    assert [r["id"] for r in rooms] == ["room-1", "room-2"]


def test_duplicate_room_ids_rejected(client):
    response = client.put("/api/household", json={"rooms": [{"id": "r1", "name": "A"}, {"id": "r1", "name": "B"}]})

    assert response.status_code == 400


def test_overlong_room_name_rejected(client):
    response = client.post("/api/rooms", json={"name": "x" * 101})

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_INPUT"


@patch("energywise.routes.HouseholdStore.save")
def test_save_failure_returns_persist_failed(mock_save, client):
    mock_save.side_effect = PersistFailed("could not save household data")

    response = client.put("/api/tariff", json={"costPerKWh": 0.9})

    assert response.status_code == 500
    data = response.get_json()
    assert data["status"] == "error"
    assert data["code"] == "PERSIST_FAILED"


def test_empty_household(client):
    client.put("/api/household", json={"rooms": [], "costPerKWh": 0.75})

    data = client.get("/api/consumption").get_json()

    assert data["totals"] == {"dailyKWh": 0, "monthlyKWh": 0, "yearlyKWh": 0}
    assert data["rooms"] == []
    assert data["topConsumers"] == []


def test_export_csv(client):
    response = client.get("/api/export.csv")

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    df = pd.read_csv(io.StringIO(response.get_data(as_text=True)))
    assert len(df) == 5


class TestSuggestionEndpoint:
    def test_applicable_with_template_generator(self, client):
        response = client.post("/api/rooms/room-2/appliances/app-4/suggestion")

        data = response.get_json()
        assert response.status_code == 200
        assert data["applicable"] is True
        assert "3,00 kWh por mês" in data["suggestion"]

    def test_not_applicable_skips_generator(self, advised_app, mock_generator):
        client = advised_app.test_client()

        data = client.post("/api/rooms/room-2/appliances/app-5/suggestion").get_json()

        assert data == {"status": "success", "suggestion": "", "applicable": False}
        mock_generator.generate.assert_not_called()

    def test_generator_receives_appliance_and_tariff(self, advised_app, mock_generator):
        mock_generator.generate.return_value = SavingsSuggestion("Desligue mais cedo.", True)
        client = advised_app.test_client()

        data = client.post("/api/rooms/room-1/appliances/app-3/suggestion").get_json()

        assert data["suggestion"] == "Desligue mais cedo."
        request = mock_generator.generate.call_args[0][0]
        assert request.appliance_name == "Ar Condicionado"
        assert request.cost_per_kwh == 0.75

    def test_generation_failure(self, advised_app, mock_generator):
        mock_generator.generate.side_effect = GenerationFailed("timeout")
        client = advised_app.test_client()

        response = client.post("/api/rooms/room-1/appliances/app-3/suggestion")

        assert response.status_code == 502
        data = response.get_json()
        assert data["code"] == "GENERATION_FAILED"
        assert "suggestion" not in data
