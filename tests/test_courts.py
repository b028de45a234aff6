from conftest import API


def test_court_types_are_seeded(client):
    names = [t["court_type_name"] for t in client.get(f"{API}/courts/types").json()]
    assert names == ["Supreme Court", "High Court", "District Court", "Sessions Court", "Civil Court"]


def test_create_court(court):
    assert court["court_type_name"] == "District Court"
    assert court["judge_count"] == 0


def test_court_name_unique_per_province(client, court_authority_headers, court):
    response = client.post(
        f"{API}/courts/create",
        json={"court_name": "District Court Lahore", "court_type_id": court["court_type_id"], "province": "Punjab"},
        headers=court_authority_headers,
    )
    assert response.status_code == 400


def test_unknown_court_type_rejected(client, court_authority_headers):
    response = client.post(
        f"{API}/courts/create",
        json={"court_name": "Nowhere Court", "court_type_id": 999},
        headers=court_authority_headers,
    )
    assert response.status_code == 400


def test_delete_rejected_while_judges_assigned(client, admin_headers, court, judge):
    response = client.delete(f"{API}/courts/{court['id']}", headers=admin_headers)
    assert response.status_code == 400
    assert "1 judge(s) assigned" in response.json()["message"]


def test_delete_court(client, admin_headers, court_authority_headers, court):
    assert client.delete(f"{API}/courts/{court['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/courts/{court['id']}", headers=court_authority_headers).status_code == 404
