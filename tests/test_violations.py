from conftest import API, issue_challan


def test_create_violation(noise_violation):
    assert noise_violation["violation_type"] == "Excessive Horn Noise"
    assert noise_violation["is_cognizable"] is False
    assert float(noise_violation["penalty_amount"]) == 2000
    assert noise_violation["total_challans"] == 0


def test_duplicate_violation_type_rejected(client, station_authority_headers, noise_violation):
    response = client.post(
        f"{API}/violations/create",
        json={
            "violation_type": "Excessive Horn Noise",
            "description": "Same thing again, different words",
            "penalty_amount": 500,
        },
        headers=station_authority_headers,
    )
    assert response.status_code == 400


def test_penalty_must_be_in_range(client, station_authority_headers):
    response = client.post(
        f"{API}/violations/create",
        json={"violation_type": "Too Expensive", "description": "Penalty beyond the cap", "penalty_amount": 2000000},
        headers=station_authority_headers,
    )
    assert response.status_code == 422
    assert "penalty_amount" in response.json()["errors"]


def test_cognizable_listing(client, officer_headers, noise_violation, cognizable_violation):
    response = client.get(f"{API}/violations/cognizable", headers=officer_headers)
    assert [v["id"] for v in response.json()] == [cognizable_violation["id"]]


def test_officer_cannot_create_violation(client, officer_headers):
    response = client.post(
        f"{API}/violations/create",
        json={"violation_type": "Whatever", "description": "Not allowed to create this", "penalty_amount": 1},
        headers=officer_headers,
    )
    assert response.status_code == 403


def test_delete_rejected_with_linked_challans(client, station_authority_headers, officer_headers, noise_violation):
    issue_challan(client, officer_headers, noise_violation["id"])
    response = client.delete(f"{API}/violations/{noise_violation['id']}", headers=station_authority_headers)
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot delete violation 'Excessive Horn Noise' because it has challans linked. "
        "Please remove or reassign challans first."
    )


def test_delete_unused_violation(client, station_authority_headers, noise_violation):
    response = client.delete(f"{API}/violations/{noise_violation['id']}", headers=station_authority_headers)
    assert response.status_code == 204
