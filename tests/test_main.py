"""
Tests for the main application endpoints and startup configuration.
"""
import pytest
from pydantic import ValidationError

from src.config import Settings
from src.database import build_engine


def test_root_endpoint(client):
    """
    Test the root endpoint returns a welcome message.
    """
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data


def test_health_check(client):
    """
    Test the health check endpoint returns a healthy status.
    """
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_health_check_reports_unreachable_database(app, client, tmp_path):
    working_engine = app.state.engine
    app.state.engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'hospital.db'}")
    try:
        response = client.get("/health")
    finally:
        app.state.engine.dispose()
        app.state.engine = working_engine

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "unavailable"}


def test_responses_carry_request_id(client):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]
    assert "X-Process-Time" in response.headers


@pytest.mark.parametrize("missing", ["JWT_SECRET_KEY", "JWT_ISSUER", "JWT_AUDIENCE"])
def test_missing_token_configuration_is_fatal(monkeypatch, missing):
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET_KEY": "secret",
        "JWT_ISSUER": "issuer",
        "JWT_AUDIENCE": "audience",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv(missing)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_defaults(settings):
    assert settings.jwt_algorithm == "HS256"
    assert settings.token_lifetime_hours == 24
    assert settings.legacy_query_auth is False
