from conftest import API, login, register

TEXT = "The accused admitted the exhaust was modified after purchase."


def add_statement(client, headers, case_id, **extra):
    body = {"case_id": case_id, "statement_text": TEXT}
    body.update(extra)
    return client.post(f"{API}/case-statements/create", json=body, headers=headers)


def test_statement_defaults_to_judge_name(client, judge_headers, case):
    response = add_statement(client, judge_headers, case["id"])
    assert response.status_code == 201
    body = response.json()
    assert body["statement_by"] == "Justice Ayesha Khan"
    assert body["case_no"] == case["case_no"]


def test_statement_by_can_be_given(client, judge_headers, case):
    response = add_statement(client, judge_headers, case["id"], statement_by="Prosecutor")
    assert response.json()["statement_by"] == "Prosecutor"


def test_only_assigned_judge_may_record(client, court_authority_headers, court, case):
    register(
        client, "judge", court_authority_headers,
        full_name="Justice Other", username="judge_other", email="other@noisesentinel.pk", court_id=court["id"],
    )
    response = add_statement(client, login(client, "judge_other"), case["id"])
    assert response.status_code == 403
    assert response.json()["message"] == "You can only create statements for cases assigned to you."


def test_court_authority_cannot_record(client, court_authority_headers, case):
    assert add_statement(client, court_authority_headers, case["id"]).status_code == 403


def test_unknown_case(client, judge_headers):
    response = add_statement(client, judge_headers, 999)
    assert response.status_code == 400
    assert response.json()["message"] == "Case with ID 999 not found."


def test_listing_and_latest(client, judge_headers, court_authority_headers, case):
    add_statement(client, judge_headers, case["id"])
    latest = add_statement(client, judge_headers, case["id"], statement_by="Defence counsel").json()

    statements = client.get(f"{API}/case-statements/case/{case['id']}", headers=court_authority_headers).json()
    assert len(statements) == 2
    response = client.get(f"{API}/case-statements/case/{case['id']}/latest", headers=judge_headers)
    assert response.json()["id"] == latest["id"]

    case_view = client.get(f"{API}/cases/{case['id']}", headers=judge_headers).json()
    assert case_view["statement_count"] == 2


def test_no_statements_yet(client, judge_headers, case):
    response = client.get(f"{API}/case-statements/case/{case['id']}/latest", headers=judge_headers)
    assert response.status_code == 404


def test_update_and_delete(client, judge_headers, case):
    statement = add_statement(client, judge_headers, case["id"]).json()
    response = client.put(
        f"{API}/case-statements/{statement['id']}",
        json={"statement_text": "Amended: the exhaust was modified by a local workshop."},
        headers=judge_headers,
    )
    assert response.status_code == 200
    assert response.json()["statement_text"].startswith("Amended")

    assert client.delete(f"{API}/case-statements/{statement['id']}", headers=judge_headers).status_code == 204
    assert client.get(f"{API}/case-statements/{statement['id']}", headers=judge_headers).status_code == 404
