from conftest import API, PASSWORD, login, register


def test_login_returns_token_with_role(client):
    response = client.post(f"{API}/auth/login", data={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "Admin"
    assert body["username"] == "admin"


def test_login_accepts_email(client):
    response = client.post(
        f"{API}/auth/login", data={"username": "ADMIN@noisesentinel.pk", "password": "admin123"}
    )
    assert response.status_code == 200


def test_login_rejects_bad_password(client):
    response = client.post(f"{API}/auth/login", data={"username": "admin", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "Invalid username or password.",
        "errors": None,
    }


def test_bootstrap_admin_refused_once_admin_exists(client):
    response = client.post(
        f"{API}/auth/bootstrap-admin",
        json={"full_name": "Other", "username": "other", "email": "other@noisesentinel.pk", "password": PASSWORD},
    )
    assert response.status_code == 403


def test_me_requires_token(client):
    assert client.get(f"{API}/auth/me").status_code == 401


def test_me_returns_profile(client, officer_headers, station):
    response = client.get(f"{API}/auth/me", headers=officer_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["role_name"] == "Police Officer"
    assert body["police_officer"]["station_id"] == station["id"]
    assert body["police_officer"]["badge_number"] == "PB-1001"


def test_only_admin_registers_authorities(client, station_authority_headers):
    response = client.post(
        f"{API}/auth/register/court-authority",
        json={"full_name": "Someone", "username": "someone", "email": "someone@noisesentinel.pk", "password": PASSWORD},
        headers=station_authority_headers,
    )
    assert response.status_code == 403


def test_duplicate_username_is_rejected(client, admin_headers, station_authority_headers):
    response = client.post(
        f"{API}/auth/register/station-authority",
        json={"full_name": "Copy", "username": "STATION_CHIEF", "email": "copy@noisesentinel.pk", "password": PASSWORD},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


def test_officer_needs_existing_station(client, station_authority_headers):
    response = client.post(
        f"{API}/auth/register/police-officer",
        json={
            "full_name": "Nobody",
            "username": "nobody",
            "email": "nobody@noisesentinel.pk",
            "password": PASSWORD,
            "station_id": 999,
        },
        headers=station_authority_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Police station with ID 999 not found."


def test_officer_cnic_format_is_validated(client, station_authority_headers, station):
    response = client.post(
        f"{API}/auth/register/police-officer",
        json={
            "full_name": "Bad Cnic",
            "username": "bad_cnic",
            "email": "bad@noisesentinel.pk",
            "password": PASSWORD,
            "station_id": station["id"],
            "cnic": "3520212345671",
        },
        headers=station_authority_headers,
    )
    assert response.status_code == 422
    assert response.json()["errors"]["cnic"] == ["CNIC must be in format: 12345-1234567-1"]


def test_change_password(client, officer_headers):
    response = client.post(
        f"{API}/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "n3w-secret"},
        headers=officer_headers,
    )
    assert response.status_code == 200
    login(client, "ali_raza", "n3w-secret")


def test_change_password_rejects_wrong_current(client, officer_headers):
    response = client.post(
        f"{API}/auth/change-password",
        json={"current_password": "not-it", "new_password": "n3w-secret"},
        headers=officer_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Current password is incorrect."


def test_deactivated_user_cannot_log_in(client, admin_headers, officer):
    response = client.delete(f"{API}/users/{officer['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = client.post(f"{API}/auth/login", data={"username": "ali_raza", "password": PASSWORD})
    assert response.status_code == 403
