from conftest import API, login, register, register_device


def second_officer_headers(client, station_authority_headers, station):
    register(
        client, "police-officer", station_authority_headers,
        full_name="Usman Tariq", username="usman", email="usman@noisesentinel.pk",
        station_id=station["id"], badge_number="PB-1002",
    )
    return login(client, "usman")


def test_register_device(client, station_authority_headers):
    device = register_device(client, station_authority_headers)
    assert device["is_registered"] is True
    assert device["is_active"] is True
    assert device["paired_officer_id"] is None


def test_device_name_pattern(client, station_authority_headers):
    response = client.post(
        f"{API}/iot-devices/register",
        json={
            "device_name": "lower case",
            "firmware_version": "1.0",
            "calibration_date": "2024-01-01T00:00:00",
            "is_calibrated": True,
        },
        headers=station_authority_headers,
    )
    assert response.status_code == 422
    assert "device_name" in response.json()["errors"]


def test_pairing_claims_device(client, officer, device, officer_headers):
    assert device["paired_officer_id"] == officer["police_officer"]["id"]
    assert device["pairing_datetime"] is not None

    mine = client.get(f"{API}/iot-devices/my-devices", headers=officer_headers).json()
    assert [d["id"] for d in mine] == [device["id"]]
    available = client.get(f"{API}/iot-devices/available", headers=officer_headers).json()
    assert available == []


def test_pairing_twice_is_rejected(client, device, officer_headers):
    response = client.post(f"{API}/iot-devices/pair", json={"device_id": device["id"]}, headers=officer_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Device 'NS-DEVICE-01' is already paired with you."


def test_device_paired_with_another_officer(client, station_authority_headers, station, device):
    headers = second_officer_headers(client, station_authority_headers, station)
    response = client.post(f"{API}/iot-devices/pair", json={"device_id": device["id"]}, headers=headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Device 'NS-DEVICE-01' is already paired with another officer."

    response = client.post(f"{API}/iot-devices/{device['id']}/unpair", headers=headers)
    assert response.status_code == 403


def test_uncalibrated_device_cannot_pair(client, station_authority_headers, officer_headers):
    device = register_device(client, station_authority_headers, name="NS-DEVICE-02", calibrated=False)
    response = client.post(f"{API}/iot-devices/pair", json={"device_id": device["id"]}, headers=officer_headers)
    assert response.status_code == 400
    assert "not calibrated" in response.json()["message"]


def test_unpair_by_owner(client, device, officer_headers):
    response = client.post(f"{API}/iot-devices/{device['id']}/unpair", headers=officer_headers)
    assert response.status_code == 200
    assert response.json()["paired_officer_id"] is None

    response = client.post(f"{API}/iot-devices/{device['id']}/unpair", headers=officer_headers)
    assert response.status_code == 400


def test_station_authority_can_unpair_any(client, device, station_authority_headers):
    response = client.post(f"{API}/iot-devices/{device['id']}/unpair", headers=station_authority_headers)
    assert response.status_code == 200


def test_unpair_unknown_device(client, officer_headers):
    assert client.post(f"{API}/iot-devices/999/unpair", headers=officer_headers).status_code == 404
