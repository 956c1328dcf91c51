"""Station API tests."""

from conftest import register_user
from fastapi.testclient import TestClient

from evstations.api.dependencies import get_station_service
from evstations.main import app
from evstations.models.station import Station


def create_station(client, headers, payload):
    response = client.post("/api/stations", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


def test_create_station(client, auth_headers, station_payload):
    """Test creating a station."""
    response = client.post("/api/stations", headers=auth_headers, json=station_payload)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Downtown Supercharger"
    assert data["location"] == {"latitude": 52.52, "longitude": 13.405}
    assert data["powerOutput"] == 150
    assert data["connectorType"] == "CCS2"
    assert data["createdBy"] == auth_headers.user_id
    assert "createdAt" in data
    assert "updatedAt" in data


def test_create_station_default_status(client, auth_headers, station_payload):
    """Test that status defaults to Active."""
    data = create_station(client, auth_headers, station_payload)
    assert data["status"] == "Active"


def test_create_station_inactive(client, auth_headers, station_payload):
    """Test creating a station with an explicit status."""
    data = create_station(client, auth_headers, {**station_payload, "status": "Inactive"})
    assert data["status"] == "Inactive"


def test_create_station_ignores_created_by(client, auth_headers, other_headers, station_payload):
    """Test that the owner always comes from the token."""
    data = create_station(
        client, auth_headers, {**station_payload, "createdBy": other_headers.user_id}
    )
    assert data["createdBy"] == auth_headers.user_id


def test_create_station_missing_fields(client, auth_headers):
    """Test that required fields are enforced."""
    response = client.post("/api/stations", headers=auth_headers, json={"name": "Half"})
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"location", "powerOutput", "connectorType"} <= fields


def test_create_station_missing_coordinate(client, auth_headers, station_payload):
    """Test that both coordinates are required."""
    payload = {**station_payload, "location": {"latitude": 52.52}}
    response = client.post("/api/stations", headers=auth_headers, json=payload)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "location.longitude"


def test_create_station_invalid_status(client, auth_headers, station_payload):
    """Test that status must be Active or Inactive."""
    payload = {**station_payload, "status": "Broken"}
    response = client.post("/api/stations", headers=auth_headers, json=payload)
    assert response.status_code == 400


def test_create_station_requires_auth(client, station_payload):
    """Test that creating a station requires a token."""
    response = client.post("/api/stations", json=station_payload)
    assert response.status_code == 401


def test_list_stations_newest_first(client, auth_headers, other_headers, station_payload):
    """Test listing all stations across owners, newest first."""
    first = create_station(client, auth_headers, {**station_payload, "name": "First"})
    second = create_station(client, other_headers, {**station_payload, "name": "Second"})

    response = client.get("/api/stations", headers=auth_headers)
    assert response.status_code == 200
    ids = [station["id"] for station in response.json()]
    assert ids == [second["id"], first["id"]]


def test_list_stations_requires_auth(client):
    """Test that listing requires a token."""
    response = client.get("/api/stations")
    assert response.status_code == 401


def test_list_my_stations(client, auth_headers, other_headers, station_payload):
    """Test listing only the caller's stations."""
    mine = create_station(client, auth_headers, station_payload)
    create_station(client, other_headers, station_payload)

    response = client.get("/api/stations/mine", headers=auth_headers)
    assert response.status_code == 200
    assert [station["id"] for station in response.json()] == [mine["id"]]


def test_get_station(client, auth_headers, other_headers, station_payload):
    """Test that any authenticated user can read a station."""
    created = create_station(client, auth_headers, station_payload)

    response = client.get(f"/api/stations/{created['id']}", headers=other_headers)
    assert response.status_code == 200
    assert response.json()["name"] == station_payload["name"]


def test_get_station_not_found(client, auth_headers):
    """Test getting an unknown station."""
    response = client.get("/api/stations/99999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Charging station not found"


def test_get_station_malformed_id(client, auth_headers):
    """Test that a malformed id reads as not found."""
    response = client.get("/api/stations/not-an-id", headers=auth_headers)
    assert response.status_code == 404


def test_station_id_out_of_range(client, auth_headers):
    """Test that ids too large for the id column read as not found."""
    huge = "99999999999999999999"

    assert client.get(f"/api/stations/{huge}", headers=auth_headers).status_code == 404
    response = client.put(f"/api/stations/{huge}", headers=auth_headers, json={"name": "X"})
    assert response.status_code == 404
    assert client.delete(f"/api/stations/{huge}", headers=auth_headers).status_code == 404


def test_update_station(client, auth_headers, station_payload, db):
    """Test that the owner can update a station and the change persists."""
    created = create_station(client, auth_headers, station_payload)

    response = client.put(
        f"/api/stations/{created['id']}",
        headers=auth_headers,
        json={"status": "Inactive", "powerOutput": 50},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Inactive"
    assert data["powerOutput"] == 50
    # Untouched fields are kept
    assert data["name"] == station_payload["name"]
    assert data["connectorType"] == "CCS2"

    station = db.get(Station, created["id"])
    db.refresh(station)
    assert station.power_output == 50


def test_update_station_location(client, auth_headers, station_payload):
    """Test moving a station."""
    created = create_station(client, auth_headers, station_payload)

    response = client.put(
        f"/api/stations/{created['id']}",
        headers=auth_headers,
        json={"location": {"latitude": 48.85, "longitude": 2.35}},
    )
    assert response.status_code == 200
    assert response.json()["location"] == {"latitude": 48.85, "longitude": 2.35}


def test_update_station_cannot_change_owner(
    client, auth_headers, other_headers, station_payload
):
    """Test that createdBy is not writable."""
    created = create_station(client, auth_headers, station_payload)

    response = client.put(
        f"/api/stations/{created['id']}",
        headers=auth_headers,
        json={"createdBy": other_headers.user_id},
    )
    assert response.status_code == 200
    assert response.json()["createdBy"] == auth_headers.user_id


def test_update_station_invalid_power(client, auth_headers, station_payload):
    """Test that power output must be a positive number."""
    created = create_station(client, auth_headers, station_payload)

    response = client.put(
        f"/api/stations/{created['id']}", headers=auth_headers, json={"powerOutput": "lots"}
    )
    assert response.status_code == 400


def test_update_station_by_non_owner(client, auth_headers, other_headers, station_payload):
    """Test that only the owner can update a station."""
    created = create_station(client, auth_headers, station_payload)

    response = client.put(
        f"/api/stations/{created['id']}", headers=other_headers, json={"name": "Hijacked"}
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "User not authorized"

    unchanged = client.get(f"/api/stations/{created['id']}", headers=auth_headers)
    assert unchanged.json()["name"] == station_payload["name"]


def test_update_station_not_found(client, auth_headers):
    """Test updating an unknown station."""
    response = client.put("/api/stations/99999", headers=auth_headers, json={"name": "X"})
    assert response.status_code == 404


def test_delete_station(client, auth_headers, station_payload):
    """Test that the owner can delete a station."""
    created = create_station(client, auth_headers, station_payload)

    response = client.delete(f"/api/stations/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["msg"] == "Charging station removed"

    response = client.get(f"/api/stations/{created['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_station_by_non_owner(client, auth_headers, other_headers, station_payload):
    """Test that a non-owner cannot delete a station."""
    created = create_station(client, auth_headers, station_payload)

    response = client.delete(f"/api/stations/{created['id']}", headers=other_headers)
    assert response.status_code == 403

    response = client.get(f"/api/stations/{created['id']}", headers=auth_headers)
    assert response.status_code == 200


def test_delete_station_not_found(client, auth_headers):
    """Test deleting an unknown station."""
    response = client.delete("/api/stations/99999", headers=auth_headers)
    assert response.status_code == 404


def test_delete_account_removes_owned_stations(
    client, auth_headers, other_headers, station_payload, db
):
    """Test that deleting an account deletes the stations it created."""
    create_station(client, auth_headers, station_payload)
    theirs = create_station(client, other_headers, station_payload)

    response = client.delete("/api/auth/delete", headers=auth_headers)
    assert response.status_code == 200

    remaining = client.get("/api/stations", headers=other_headers).json()
    assert [station["id"] for station in remaining] == [theirs["id"]]
    assert db.query(Station).filter(Station.created_by == auth_headers.user_id).count() == 0


def test_end_to_end_ownership(client, station_payload):
    """Register, create, list, forbidden delete, owner delete, then gone."""
    alice = register_user(client, "Alice", "a@x.com", password="secret1")
    bob = register_user(client, "Bob", "b@x.com", password="secret2")

    station = create_station(client, alice, station_payload)
    assert station["createdBy"] == alice.user_id

    listed = client.get("/api/stations", headers=alice).json()
    assert station["id"] in [s["id"] for s in listed]

    response = client.delete(f"/api/stations/{station['id']}", headers=bob)
    assert response.status_code == 403

    response = client.delete(f"/api/stations/{station['id']}", headers=alice)
    assert response.status_code == 200

    response = client.get(f"/api/stations/{station['id']}", headers=alice)
    assert response.status_code == 404


class BrokenStationService:
    """Station service whose store is unreachable."""

    def list_all(self):
        raise RuntimeError("connection to server at 10.0.0.5 refused")


def test_unexpected_error_returns_generic_500(client, auth_headers):
    """Test that unexpected failures are hidden behind a generic 500."""
    app.dependency_overrides[get_station_service] = lambda: BrokenStationService()

    with TestClient(app, raise_server_exceptions=False) as failing_client:
        response = failing_client.get("/api/stations", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Server error"}
    assert "10.0.0.5" not in response.text
