from conftest import API


def test_station_code_is_uppercased(client, station):
    assert station["station_code"] == "LHR-001"
    assert station["is_active"] is True
    assert station["officer_count"] == 0


def test_duplicate_station_code_rejected(client, station_authority_headers, station):
    response = client.post(
        f"{API}/police-stations/create",
        json={"station_name": "Another Station", "station_code": "LHR-001", "province": "Punjab"},
        headers=station_authority_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Station code 'LHR-001' already exists."


def test_lookup_by_code(client, station_authority_headers, station):
    response = client.get(f"{API}/police-stations/code/lhr-001", headers=station_authority_headers)
    assert response.status_code == 200
    assert response.json()["id"] == station["id"]


def test_officer_count_reflects_assignments(client, station_authority_headers, station, officer):
    response = client.get(f"{API}/police-stations/{station['id']}", headers=station_authority_headers)
    assert response.json()["officer_count"] == 1


def test_delete_rejected_while_officers_assigned(client, admin_headers, station, officer):
    response = client.delete(f"{API}/police-stations/{station['id']}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot delete police station 'Gulberg Police Station' because it has 1 officer(s) assigned. "
        "Please reassign or remove officers first."
    )


def test_delete_deactivates_station(client, admin_headers, station_authority_headers, station):
    response = client.delete(f"{API}/police-stations/{station['id']}", headers=admin_headers)
    assert response.status_code == 204

    active = client.get(f"{API}/police-stations/list", headers=station_authority_headers).json()
    assert active == []
    everything = client.get(
        f"{API}/police-stations/list", params={"include_inactive": True}, headers=station_authority_headers
    ).json()
    assert [s["is_active"] for s in everything] == [False]


def test_update_station(client, station_authority_headers, station):
    response = client.put(
        f"{API}/police-stations/{station['id']}",
        json={"contact": "042-1234567"},
        headers=station_authority_headers,
    )
    assert response.status_code == 200
    assert response.json()["contact"] == "042-1234567"
