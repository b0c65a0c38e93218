"""
Tests for the admin user management endpoints.
"""
import pytest

from clinic_portal.auth.models import UserRole


@pytest.fixture
def admin_headers(make_user, login):
    make_user("admin@clinic.org", role=UserRole.ADMIN, full_name="Clinic Admin")
    return login("admin@clinic.org")


def test_create_user(client, admin_headers, login):
    response = client.post(
        "/api/v1/users",
        json={
            "email": "New.Doctor@Clinic.org",
            "password": "secret1",
            "full_name": "New Doctor",
            "role": "doctor",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new.doctor@clinic.org"
    assert data["role"] == "doctor"
    assert data["is_active"] is True
    assert "password" not in data
    assert "password_hash" not in data

    login("new.doctor@clinic.org", "secret1")


def test_create_user_duplicate_email(client, admin_headers, make_user):
    make_user("taken@clinic.org")

    response = client.post(
        "/api/v1/users",
        json={"email": "TAKEN@clinic.org", "password": "secret1", "full_name": "Copy Cat", "role": "receptionist"},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


@pytest.mark.parametrize("payload", [
    {"email": "x@clinic.org", "password": "secret1", "full_name": "Nurse Joy", "role": "nurse"},
    {"email": "x@clinic.org", "password": "short", "full_name": "Nurse Joy", "role": "doctor"},
    {"email": "x@clinic.org", "password": "secret1", "full_name": "N", "role": "doctor"},
    {"email": "not-an-email", "password": "secret1", "full_name": "Nurse Joy", "role": "doctor"},
])
def test_create_user_validation(client, admin_headers, payload):
    response = client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_user_management_is_admin_only(client, make_user, login):
    doctor = make_user("doctor@clinic.org")
    headers = login("doctor@clinic.org")

    assert client.get("/api/v1/users", headers=headers).status_code == 403
    response = client.post(
        "/api/v1/users",
        json={"email": "x@clinic.org", "password": "secret1", "full_name": "Someone", "role": "admin"},
        headers=headers,
    )
    assert response.status_code == 403
    response = client.patch(f"/api/v1/users/{doctor.id}", json={"role": "admin"}, headers=headers)
    assert response.status_code == 403

    assert client.get("/api/v1/users").status_code == 401


def test_list_users(client, admin_headers, make_user):
    make_user("doctor@clinic.org")
    make_user("desk@clinic.org", role=UserRole.RECEPTIONIST)

    response = client.get("/api/v1/users", headers=admin_headers)
    assert response.status_code == 200
    emails = [user["email"] for user in response.json()]
    assert emails == ["admin@clinic.org", "doctor@clinic.org", "desk@clinic.org"]


def test_role_change_applies_to_existing_token(client, admin_headers, make_user, login):
    doctor = make_user("doctor@clinic.org")
    doctor_headers = login("doctor@clinic.org")
    assert client.get("/api/v1/dashboards/admin", headers=doctor_headers).status_code == 403

    response = client.patch(f"/api/v1/users/{doctor.id}", json={"role": "admin"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "admin"

    assert client.get("/api/v1/dashboards/admin", headers=doctor_headers).status_code == 200
    assert client.get("/api/v1/dashboards/doctor", headers=doctor_headers).status_code == 403


def test_update_keeps_omitted_fields(client, admin_headers, make_user):
    doctor = make_user("doctor@clinic.org", full_name="Dr. Grey")

    response = client.patch(f"/api/v1/users/{doctor.id}", json={"full_name": "Dr. Meredith Grey"}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["full_name"] == "Dr. Meredith Grey"
    assert data["email"] == "doctor@clinic.org"
    assert data["role"] == "doctor"
    assert data["is_active"] is True


def test_reactivation(client, admin_headers, make_user, login):
    former = make_user("former@clinic.org", is_active=False)

    response = client.patch(f"/api/v1/users/{former.id}", json={"is_active": True}, headers=admin_headers)
    assert response.status_code == 200

    login("former@clinic.org")


def test_update_unknown_user(client, admin_headers):
    response = client.patch("/api/v1/users/9999", json={"full_name": "Ghost User"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_update_email_taken(client, admin_headers, make_user):
    make_user("taken@clinic.org")
    doctor = make_user("doctor@clinic.org")

    response = client.patch(f"/api/v1/users/{doctor.id}", json={"email": "taken@clinic.org"}, headers=admin_headers)
    assert response.status_code == 409


def test_update_email_to_own_address(client, admin_headers, make_user):
    doctor = make_user("doctor@clinic.org")

    response = client.patch(f"/api/v1/users/{doctor.id}", json={"email": "doctor@clinic.org"}, headers=admin_headers)
    assert response.status_code == 200


def test_update_email_is_lowercased(client, admin_headers, make_user, login):
    doctor = make_user("doctor@clinic.org")

    response = client.patch(f"/api/v1/users/{doctor.id}", json={"email": "Dr.Grey@Clinic.org"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "dr.grey@clinic.org"

    login("dr.grey@clinic.org")


def test_update_email_taken_in_other_case(client, admin_headers, make_user):
    make_user("taken@clinic.org")
    doctor = make_user("doctor@clinic.org")

    response = client.patch(f"/api/v1/users/{doctor.id}", json={"email": "Taken@clinic.org"}, headers=admin_headers)
    assert response.status_code == 409


def test_no_case_only_duplicates_after_update(client, admin_headers, make_user):
    doctor = make_user("doctor@clinic.org")
    client.patch(f"/api/v1/users/{doctor.id}", json={"email": "New.Doc@clinic.org"}, headers=admin_headers)

    response = client.post(
        "/api/v1/users",
        json={"email": "new.doc@clinic.org", "password": "secret1", "full_name": "Copy Cat", "role": "doctor"},
        headers=admin_headers,
    )
    assert response.status_code == 409
