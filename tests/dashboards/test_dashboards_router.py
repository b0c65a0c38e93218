"""
Tests for the role dashboards.
"""
from clinic_portal.auth.models import UserRole


def test_admin_dashboard(client, make_user, login):
    make_user("admin@clinic.org", role=UserRole.ADMIN)
    make_user("doc1@clinic.org", full_name="Dr. One")
    make_user("doc2@clinic.org", full_name="Dr. Two", is_active=False)
    make_user("desk@clinic.org", role=UserRole.RECEPTIONIST, full_name="Front Desk")
    headers = login("admin@clinic.org")

    response = client.get("/api/v1/dashboards/admin", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_users"] == 4
    assert data["total_doctors"] == 2
    assert data["total_receptionists"] == 1
    assert data["active_users"] == 3
    assert [entry["full_name"] for entry in data["recent_registrations"]][0] == "Front Desk"
    assert {"id", "full_name", "role", "created_at"} == set(data["recent_registrations"][0])


def test_admin_dashboard_lists_ten_most_recent(client, make_user, login):
    make_user("admin@clinic.org", role=UserRole.ADMIN)
    for index in range(12):
        make_user(f"doc{index}@clinic.org")
    headers = login("admin@clinic.org")

    data = client.get("/api/v1/dashboards/admin", headers=headers).json()
    assert data["total_users"] == 13
    assert len(data["recent_registrations"]) == 10


def test_doctor_dashboard(client, make_user, login):
    doctor = make_user("doctor@clinic.org", full_name="Dr. Grey")
    headers = login("doctor@clinic.org")

    response = client.get("/api/v1/dashboards/doctor", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["doctor_info"] == {"id": doctor.id, "full_name": "Dr. Grey", "email": "doctor@clinic.org"}
    assert [slot["time"] for slot in data["today_schedule"]] == [
        "08:00", "09:00", "10:00", "11:00", "13:00", "14:00", "15:00", "16:00",
    ]
    assert all(slot["patient_name"] is None for slot in data["today_schedule"])


def test_receptionist_dashboard(client, make_user, login):
    receptionist = make_user("desk@clinic.org", role=UserRole.RECEPTIONIST, full_name="Front Desk")
    headers = login("desk@clinic.org")

    response = client.get("/api/v1/dashboards/receptionist", headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "receptionist_info": {"id": receptionist.id, "full_name": "Front Desk", "email": "desk@clinic.org"},
        "pending_appointments": 0,
        "today_appointments": 0,
    }


def test_each_dashboard_belongs_to_one_role(client, make_user, login):
    make_user("admin@clinic.org", role=UserRole.ADMIN)
    make_user("doctor@clinic.org")
    make_user("desk@clinic.org", role=UserRole.RECEPTIONIST)
    headers = {
        "admin": login("admin@clinic.org"),
        "doctor": login("doctor@clinic.org"),
        "receptionist": login("desk@clinic.org"),
    }

    for dashboard in headers:
        for role, role_headers in headers.items():
            response = client.get(f"/api/v1/dashboards/{dashboard}", headers=role_headers)
            expected = 200 if role == dashboard else 403
            assert response.status_code == expected, (dashboard, role)


def test_dashboards_require_a_session(client):
    for dashboard in ["admin", "doctor", "receptionist"]:
        assert client.get(f"/api/v1/dashboards/{dashboard}").status_code == 401
