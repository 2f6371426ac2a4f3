"""
Tests for the doctor dashboard and doctor directory.
"""
from src.auth.models import User, UserRole
from tests.helpers import auth_header, create_patient, register


def test_doctor_registration_scenario(client):
    first = register(client, "doc1", "doc1@h.com", role="Doctor")
    assert first.status_code == 200
    assert first.json()["token"]

    duplicate = register(client, "doc1", "doc1-second@h.com", role="Doctor")
    assert duplicate.status_code == 400

    info = client.get("/api/doctors/info").json()
    assert info["totalDoctors"] == 1
    assert info["doctors"][0]["username"] == "doc1"
    assert set(info["doctors"][0]) == {"id", "username", "email", "createdAt"}


def test_doctor_directory_excludes_patients(client):
    register(client, "doc1", "doc1@h.com", role="Doctor")
    register(client, "pat1", "pat1@h.com")

    usernames = [doctor["username"] for doctor in client.get("/api/doctors/info").json()["doctors"]]

    assert usernames == ["doc1"]


def test_dashboard_without_token_shows_instructions(client):
    response = client.get("/api/doctors/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert "loginSteps" in data
    assert "registerExample" in data


def test_dashboard_with_query_token(client):
    token = register(client, "doc1", "doc1@h.com", role="Doctor").json()["token"]
    create_patient(client)

    response = client.get("/api/doctors/dashboard", params={"token": token})

    assert response.status_code == 200
    data = response.json()
    assert data["totalPatients"] == 1
    assert data["doctor"]["username"] == "doc1"
    assert data["doctor"]["role"] == "Doctor"


def test_dashboard_with_bearer_header(client):
    token = register(client, "doc1", "doc1@h.com", role="Doctor").json()["token"]

    response = client.get("/api/doctors/dashboard", headers=auth_header(token))

    assert response.status_code == 200
    assert response.json()["totalPatients"] == 0


def test_dashboard_forbids_other_roles(client):
    token = register(client, "pat1", "pat1@h.com").json()["token"]

    by_query = client.get("/api/doctors/dashboard", params={"token": token})
    by_header = client.get("/api/doctors/dashboard", headers=auth_header(token))

    assert by_query.status_code == by_header.status_code == 403


def test_dashboard_rejects_invalid_and_expired_tokens(client, expired_token_issuer):
    expired = expired_token_issuer.issue(
        User(id=1, username="doc1", email="doc1@h.com", role=UserRole.DOCTOR)
    ).token

    assert client.get("/api/doctors/dashboard", params={"token": "garbage"}).status_code == 401
    assert client.get("/api/doctors/dashboard", params={"token": expired}).status_code == 401
    assert client.get("/api/doctors/dashboard", headers=auth_header(expired)).status_code == 401
