import os
import tempfile
from datetime import datetime, timedelta

_db_dir = tempfile.mkdtemp(prefix="noise_sentinel_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from main import app, seed_defaults
from noise_sentinel.core.database import Base, engine, SessionLocal

API = "/api/v1"
PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    seed_defaults()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def login(client, username, password=PASSWORD):
    response = client.post(f"{API}/auth/login", data={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def register(client, kind, headers, **fields):
    fields.setdefault("password", PASSWORD)
    response = client.post(f"{API}/auth/register/{kind}", json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def recent(minutes=60):
    return (datetime.utcnow() - timedelta(minutes=minutes)).isoformat()


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "admin123")


@pytest.fixture
def station_authority_headers(client, admin_headers):
    register(
        client, "station-authority", admin_headers,
        full_name="Station Chief", username="station_chief", email="chief@noisesentinel.pk",
    )
    return login(client, "station_chief")


@pytest.fixture
def court_authority_headers(client, admin_headers):
    register(
        client, "court-authority", admin_headers,
        full_name="Court Registrar", username="registrar", email="registrar@noisesentinel.pk",
    )
    return login(client, "registrar")


@pytest.fixture
def station(client, station_authority_headers):
    response = client.post(
        f"{API}/police-stations/create",
        json={
            "station_name": "Gulberg Police Station",
            "station_code": "lhr-001",
            "location": "Gulberg, Lahore",
            "district": "Lahore",
            "province": "Punjab",
        },
        headers=station_authority_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def officer(client, station_authority_headers, station):
    return register(
        client, "police-officer", station_authority_headers,
        full_name="Ali Raza", username="ali_raza", email="ali@noisesentinel.pk",
        station_id=station["id"], cnic="35202-1234567-1", badge_number="PB-1001", rank="Inspector",
    )


@pytest.fixture
def officer_headers(client, officer):
    return login(client, "ali_raza")


@pytest.fixture
def court(client, court_authority_headers):
    types = client.get(f"{API}/courts/types").json()
    district = next(t for t in types if t["court_type_name"] == "District Court")
    response = client.post(
        f"{API}/courts/create",
        json={
            "court_name": "District Court Lahore",
            "court_type_id": district["id"],
            "location": "Lahore",
            "district": "Lahore",
            "province": "Punjab",
        },
        headers=court_authority_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def judge(client, court_authority_headers, court):
    return register(
        client, "judge", court_authority_headers,
        full_name="Justice Ayesha Khan", username="judge_ayesha", email="ayesha@noisesentinel.pk",
        court_id=court["id"], rank="Civil Judge",
    )


@pytest.fixture
def judge_headers(client, judge):
    return login(client, "judge_ayesha")


def create_violation(client, headers, violation_type, cognizable=False, penalty=2000):
    response = client.post(
        f"{API}/violations/create",
        json={
            "violation_type": violation_type,
            "description": f"{violation_type} beyond permitted limits",
            "penalty_amount": penalty,
            "section_of_law": "MVO 1965 s.116",
            "is_cognizable": cognizable,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def noise_violation(client, station_authority_headers):
    return create_violation(client, station_authority_headers, "Excessive Horn Noise")


@pytest.fixture
def cognizable_violation(client, station_authority_headers):
    return create_violation(
        client, station_authority_headers, "Modified Exhaust Silencer", cognizable=True, penalty=10000
    )


def register_device(client, headers, name="NS-DEVICE-01", calibrated=True):
    response = client.post(
        f"{API}/iot-devices/register",
        json={
            "device_name": name,
            "firmware_version": "v1.2.0",
            "calibration_date": recent(60 * 24),
            "is_calibrated": calibrated,
            "calibration_certificate_no": "CAL-2024-77",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def device(client, station_authority_headers, officer_headers):
    device = register_device(client, station_authority_headers)
    response = client.post(f"{API}/iot-devices/pair", json={"device_id": device["id"]}, headers=officer_headers)
    assert response.status_code == 200, response.text
    return response.json()


def create_report(client, headers, device_id, sound=92.5, minutes_ago=60):
    response = client.post(
        f"{API}/emission-reports/create",
        json={
            "device_id": device_id,
            "co": 1.25,
            "co2": 14.5,
            "hc": 120,
            "nox": 0.35,
            "sound_level_dba": sound,
            "test_datetime": recent(minutes_ago),
            "ml_classification": "Modified Exhaust",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def report(client, officer_headers, device):
    return create_report(client, officer_headers, device["id"])


VEHICLE_INPUT = {
    "plate_number": "lea-1234",
    "make": "Honda CD-70",
    "color": "Red",
    "registration_year": 2019,
}

ACCUSED_INPUT = {
    "full_name": "Bilal Ahmed",
    "cnic": "35201-7654321-3",
    "city": "Lahore",
    "province": "Punjab",
    "contact": "0300-1234567",
}


def issue_challan(client, headers, violation_id, report_id=None, **extra):
    body = {
        "violation_id": violation_id,
        "emission_report_id": report_id,
        "vehicle_input": dict(VEHICLE_INPUT),
        "accused_input": dict(ACCUSED_INPUT),
    }
    body.update(extra)
    response = client.post(f"{API}/challans/create", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["challan"]


@pytest.fixture
def cognizable_challan(client, officer_headers, cognizable_violation, report):
    return issue_challan(client, officer_headers, cognizable_violation["id"], report["id"])


@pytest.fixture
def fir(client, station_authority_headers, cognizable_challan):
    response = client.post(
        f"{API}/firs/create",
        json={
            "challan_id": cognizable_challan["id"],
            "fir_description": "Vehicle fitted with a modified exhaust producing excessive noise.",
        },
        headers=station_authority_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def case(client, court_authority_headers, fir, judge):
    response = client.post(
        f"{API}/cases/create",
        json={"fir_id": fir["id"], "judge_id": judge["judge"]["id"]},
        headers=court_authority_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
