from datetime import datetime

from conftest import API, ACCUSED_INPUT, VEHICLE_INPUT, issue_challan


def create_accused(client, headers, **overrides):
    body = dict(ACCUSED_INPUT, **overrides)
    response = client.post(f"{API}/accused/create", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_accused_cnic_must_be_formatted(client, station_authority_headers):
    response = client.post(
        f"{API}/accused/create",
        json=dict(ACCUSED_INPUT, cnic="35201-765432-3"),
        headers=station_authority_headers,
    )
    assert response.status_code == 422
    assert response.json()["errors"]["cnic"] == ["CNIC must be in format: 12345-1234567-1"]


def test_accused_cnic_unique(client, station_authority_headers):
    create_accused(client, station_authority_headers)
    response = client.post(f"{API}/accused/create", json=ACCUSED_INPUT, headers=station_authority_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Person with CNIC '35201-7654321-3' already exists in the system."


def test_lookup_by_cnic(client, station_authority_headers):
    accused = create_accused(client, station_authority_headers)
    response = client.get(f"{API}/accused/cnic/35201-7654321-3", headers=station_authority_headers)
    assert response.json()["id"] == accused["id"]

    assert client.get(f"{API}/accused/cnic/bad", headers=station_authority_headers).status_code == 400
    assert client.get(f"{API}/accused/cnic/11111-1111111-1", headers=station_authority_headers).status_code == 404


def test_accused_with_challans_cannot_be_deleted(client, station_authority_headers, officer_headers, noise_violation):
    challan = issue_challan(client, officer_headers, noise_violation["id"])
    response = client.delete(f"{API}/accused/{challan['accused_id']}", headers=station_authority_headers)
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot delete person 'Bilal Ahmed' because they have 1 violation(s) linked."
    )


def test_delete_accused_without_links(client, station_authority_headers):
    accused = create_accused(client, station_authority_headers)
    assert client.delete(f"{API}/accused/{accused['id']}", headers=station_authority_headers).status_code == 204


def test_vehicle_plate_is_normalized_and_unique(client, station_authority_headers):
    response = client.post(f"{API}/vehicles/create", json=VEHICLE_INPUT, headers=station_authority_headers)
    assert response.status_code == 201
    assert response.json()["plate_number"] == "LEA-1234"

    response = client.post(
        f"{API}/vehicles/create", json=dict(VEHICLE_INPUT, plate_number=" LEA-1234 "), headers=station_authority_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Vehicle with plate number 'LEA-1234' already exists."


def test_vehicle_year_not_in_future(client, station_authority_headers):
    response = client.post(
        f"{API}/vehicles/create",
        json=dict(VEHICLE_INPUT, registration_year=datetime.utcnow().year + 1),
        headers=station_authority_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Vehicle registration year cannot be in the future."


def test_vehicle_owner_must_exist(client, station_authority_headers):
    response = client.post(
        f"{API}/vehicles/create", json=dict(VEHICLE_INPUT, owner_id=999), headers=station_authority_headers
    )
    assert response.status_code == 400


def test_vehicles_by_owner(client, station_authority_headers):
    owner = create_accused(client, station_authority_headers)
    client.post(
        f"{API}/vehicles/create", json=dict(VEHICLE_INPUT, owner_id=owner["id"]), headers=station_authority_headers
    )
    response = client.get(f"{API}/vehicles/owner/{owner['id']}", headers=station_authority_headers)
    vehicles = response.json()
    assert [v["plate_number"] for v in vehicles] == ["LEA-1234"]
    assert vehicles[0]["owner_cnic"] == "35201-7654321-3"
