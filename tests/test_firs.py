from datetime import datetime

from conftest import API, issue_challan, login, register

DESCRIPTION = "Vehicle fitted with a modified exhaust producing excessive noise."


def test_fir_number_and_defaults(fir, cognizable_challan, officer):
    year = datetime.utcnow().year
    assert fir["fir_no"] == f"FIR-LHR001-{year}-0001"
    assert fir["fir_status"] == "Filed"
    assert fir["challan_id"] == cognizable_challan["id"]
    assert fir["informant_id"] == officer["police_officer"]["id"]
    assert fir["informant_name"] == "Ali Raza"
    assert fir["station_name"] == "Gulberg Police Station"
    assert fir["has_case"] is False


def test_sequence_counts_per_station(client, station_authority_headers, officer_headers, cognizable_violation, fir):
    challan = issue_challan(client, officer_headers, cognizable_violation["id"])
    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": challan["id"], "fir_description": DESCRIPTION},
        headers=station_authority_headers,
    )
    assert response.status_code == 201
    assert response.json()["fir_no"].endswith("-0002")


def test_codes_differing_only_by_dash_do_not_collide(
    client, station_authority_headers, cognizable_violation, fir
):
    station = client.post(
        f"{API}/police-stations/create",
        json={
            "station_name": "Model Town Police Station",
            "station_code": "LHR001",
            "location": "Model Town, Lahore",
            "district": "Lahore",
            "province": "Punjab",
        },
        headers=station_authority_headers,
    ).json()
    register(
        client, "police-officer", station_authority_headers,
        full_name="Sana Iqbal", username="sana_iqbal", email="sana@noisesentinel.pk",
        station_id=station["id"], badge_number="PB-2002",
    )
    challan = issue_challan(client, login(client, "sana_iqbal"), cognizable_violation["id"])

    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": challan["id"], "fir_description": DESCRIPTION},
        headers=station_authority_headers,
    )
    assert response.status_code == 201, response.text
    year = datetime.utcnow().year
    assert response.json()["fir_no"] == f"FIR-LHR001-{year}-0002"


def test_non_cognizable_challan_rejected(client, station_authority_headers, officer_headers, noise_violation):
    challan = issue_challan(client, officer_headers, noise_violation["id"])
    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": challan["id"], "fir_description": DESCRIPTION},
        headers=station_authority_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot create FIR for non-cognizable violation. Violation type 'Excessive Horn Noise' is not cognizable."
    )


def test_one_fir_per_challan(client, station_authority_headers, cognizable_challan, fir):
    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": cognizable_challan["id"], "fir_description": DESCRIPTION},
        headers=station_authority_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        f"Challan #{cognizable_challan['id']} already has an FIR. Each challan can only have one FIR."
    )


def test_unknown_challan(client, station_authority_headers):
    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": 999, "fir_description": DESCRIPTION},
        headers=station_authority_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Challan with ID 999 not found."


def test_description_length(client, station_authority_headers, cognizable_challan):
    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": cognizable_challan["id"], "fir_description": "too short"},
        headers=station_authority_headers,
    )
    assert response.status_code == 422


def test_challan_shows_fir(client, station_authority_headers, cognizable_challan, fir):
    challan = client.get(f"{API}/challans/{cognizable_challan['id']}", headers=station_authority_headers).json()
    assert challan["has_fir"] is True
    assert challan["fir_id"] == fir["id"]


def test_cognizable_challans_without_fir(
    client, station_authority_headers, officer_headers, noise_violation, cognizable_violation, fir
):
    pending = issue_challan(client, officer_headers, cognizable_violation["id"])
    issue_challan(client, officer_headers, noise_violation["id"])
    response = client.get(f"{API}/firs/cognizable-challans", headers=station_authority_headers)
    assert [c["id"] for c in response.json()] == [pending["id"]]


def test_update_and_escalate(client, station_authority_headers, fir):
    response = client.put(
        f"{API}/firs/{fir['id']}",
        json={"fir_status": "Under Investigation", "investigation_report": "Exhaust inspected at station."},
        headers=station_authority_headers,
    )
    assert response.status_code == 200
    assert response.json()["fir_status"] == "Under Investigation"

    response = client.post(f"{API}/firs/{fir['id']}/escalate", headers=station_authority_headers)
    assert response.json()["fir_status"] == "Forwarded to Court"
    response = client.post(f"{API}/firs/{fir['id']}/escalate", headers=station_authority_headers)
    assert response.status_code == 400


def test_closed_fir_stays_closed(client, station_authority_headers, fir):
    client.put(f"{API}/firs/{fir['id']}", json={"fir_status": "Closed"}, headers=station_authority_headers)
    response = client.put(f"{API}/firs/{fir['id']}", json={"fir_status": "Filed"}, headers=station_authority_headers)
    assert response.status_code == 400


def test_lookup_and_search(client, court_authority_headers, officer_headers, fir):
    response = client.get(f"{API}/firs/number/{fir['fir_no'].lower()}", headers=officer_headers)
    assert response.json()["id"] == fir["id"]

    found = client.get(f"{API}/firs/search", params={"q": "LEA-1234"}, headers=court_authority_headers).json()
    assert [f["id"] for f in found] == [fir["id"]]
    found = client.get(f"{API}/firs/search", params={"q": "bilal"}, headers=court_authority_headers).json()
    assert [f["id"] for f in found] == [fir["id"]]

    filed = client.get(f"{API}/firs/status/Filed", headers=court_authority_headers).json()
    assert len(filed) == 1


def test_officer_cannot_file_fir(client, officer_headers, cognizable_challan):
    response = client.post(
        f"{API}/firs/create",
        json={"challan_id": cognizable_challan["id"], "fir_description": DESCRIPTION},
        headers=officer_headers,
    )
    assert response.status_code == 403
