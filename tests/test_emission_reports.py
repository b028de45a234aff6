from datetime import datetime, timedelta

from conftest import API, create_report, recent, register_device
from noise_sentinel.features.emission_report.model import EmissionReport
from noise_sentinel.features.emission_report.service import generate_signature
from noise_sentinel.features.iot_device.model import IotDevice


def test_report_is_signed_and_flagged(report):
    assert report["digital_signature_value"]
    assert report["is_violation"] is True
    assert report["has_challan"] is False
    assert report["device_name"] == "NS-DEVICE-01"


def test_quiet_reading_is_not_a_violation(client, officer_headers, device):
    report = create_report(client, officer_headers, device["id"], sound=72.0)
    assert report["is_violation"] is False


def test_signature_is_deterministic():
    when = datetime(2024, 5, 1, 10, 30)
    first = generate_signature(1, 1.25, 14.5, 120, 0.35, 92.5, when)
    second = generate_signature(1, 1.250, 14.50, 120.00, 0.350, 92.50, when)
    assert first == second
    assert first != generate_signature(1, 1.25, 14.5, 120, 0.35, 92.6, when)
    assert first != generate_signature(2, 1.25, 14.5, 120, 0.35, 92.5, when)


def test_verify_authentic_report(client, court_authority_headers, report):
    response = client.get(f"{API}/emission-reports/{report['id']}/verify", headers=court_authority_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["is_authentic"] is True
    assert body["admissible_in_court"] is True
    assert body["stored_signature"] == body["computed_signature"]


def test_verify_detects_tampering(client, db, court_authority_headers, report):
    stored = db.query(EmissionReport).filter(EmissionReport.id == report["id"]).first()
    stored.sound_level_dba = 70
    db.commit()

    response = client.get(f"{API}/emission-reports/{report['id']}/verify", headers=court_authority_headers)
    body = response.json()
    assert body["is_authentic"] is False
    assert body["admissible_in_court"] is False
    assert body["data_integrity"] == "COMPROMISED - Data has been modified"


def test_duplicate_reading_window(client, officer_headers, device, report):
    response = client.post(
        f"{API}/emission-reports/create",
        json={
            "device_id": device["id"],
            "sound_level_dba": 95,
            "test_datetime": (datetime.utcnow() - timedelta(minutes=62)).isoformat(),
        },
        headers=officer_headers,
    )
    assert response.status_code == 400
    assert "Possible duplicate detected" in response.json()["message"]


def test_reading_outside_window_is_accepted(client, officer_headers, device, report):
    create_report(client, officer_headers, device["id"], minutes_ago=10)


def test_future_reading_rejected(client, officer_headers, device):
    response = client.post(
        f"{API}/emission-reports/create",
        json={
            "device_id": device["id"],
            "sound_level_dba": 95,
            "test_datetime": (datetime.utcnow() + timedelta(hours=1)).isoformat(),
        },
        headers=officer_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Test date/time cannot be in the future."


def test_unknown_device_rejected(client, officer_headers):
    response = client.post(
        f"{API}/emission-reports/create",
        json={"device_id": 999, "sound_level_dba": 95, "test_datetime": datetime.utcnow().isoformat()},
        headers=officer_headers,
    )
    assert response.status_code == 400


def test_violation_listing_and_without_challan(client, station_authority_headers, officer_headers, device, report):
    create_report(client, officer_headers, device["id"], sound=70, minutes_ago=20)

    violations = client.get(f"{API}/emission-reports/violations", headers=station_authority_headers).json()
    assert [r["id"] for r in violations] == [report["id"]]

    pending = client.get(f"{API}/emission-reports/without-challan", headers=officer_headers).json()
    assert len(pending) == 2


def _submit_reading(client, headers, device_id):
    return client.post(
        f"{API}/emission-reports/create",
        json={"device_id": device_id, "sound_level_dba": 95, "test_datetime": recent(10)},
        headers=headers,
    )


def test_unregistered_device_cannot_report(client, db, station_authority_headers, officer_headers):
    device = register_device(client, station_authority_headers)
    stored = db.query(IotDevice).filter(IotDevice.id == device["id"]).first()
    stored.is_registered = False
    db.commit()

    response = _submit_reading(client, officer_headers, device["id"])
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Device 'NS-DEVICE-01' is not registered. Cannot create emission report."
    )
    assert db.query(EmissionReport).count() == 0


def test_uncalibrated_device_cannot_report(client, db, station_authority_headers, officer_headers):
    device = register_device(client, station_authority_headers, calibrated=False)

    response = _submit_reading(client, officer_headers, device["id"])
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Device 'NS-DEVICE-01' is not calibrated. Readings may be inaccurate."
    )
    assert db.query(EmissionReport).count() == 0


def test_inactive_device_cannot_report(client, db, station_authority_headers, officer_headers):
    device = register_device(client, station_authority_headers)
    stored = db.query(IotDevice).filter(IotDevice.id == device["id"]).first()
    stored.is_active = False
    db.commit()

    response = _submit_reading(client, officer_headers, device["id"])
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Device 'NS-DEVICE-01' is not active. Cannot create emission report."
    )
    assert db.query(EmissionReport).count() == 0
