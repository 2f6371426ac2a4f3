"""
Test configuration for the hospital API.

Every test gets its own application bound to a fresh in-memory SQLite database.
"""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from src.auth.models import utcnow
from src.auth.repository import UserRepository
from src.auth.service import AuthService
from src.config import Settings
from src.core.security import TokenIssuer
from src.main import create_app
from src.patients.repository import PatientRepository
from src.patients.service import PatientService

TEST_SETTINGS = {
    "database_url": "sqlite://",
    "jwt_secret_key": "test-secret-key-that-is-long-enough-for-hs256",
    "jwt_issuer": "hospital-api-tests",
    "jwt_audience": "hospital-api-test-clients",
}


def make_settings(**overrides) -> Settings:
    return Settings(**{**TEST_SETTINGS, **overrides})


@pytest.fixture(scope="function")
def settings():
    return make_settings()


@pytest.fixture(scope="function")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def db(app):
    """
    Session on the application's database, for service-level tests.
    """
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for the application.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture(scope="function")
def legacy_client():
    """
    Test client for an application with query-parameter registration and login.
    """
    app = create_app(make_settings(legacy_query_auth=True))
    with TestClient(app) as client:
        yield client


@pytest.fixture(scope="function")
def token_issuer(app) -> TokenIssuer:
    return app.state.token_issuer


@pytest.fixture(scope="function")
def expired_token_issuer(settings) -> TokenIssuer:
    """Issuer whose clock runs 25 hours behind, so its tokens are already expired."""
    return TokenIssuer(settings, clock=lambda: utcnow() - timedelta(hours=25))


@pytest.fixture(scope="function")
def auth_service(db, token_issuer) -> AuthService:
    return AuthService(UserRepository(db), token_issuer)


@pytest.fixture(scope="function")
def patient_service(db) -> PatientService:
    return PatientService(PatientRepository(db))


@pytest.fixture(scope="function")
def file_backed_app(tmp_path):
    """
    Application on a SQLite file, so separate sessions use separate connections.
    """
    app = create_app(make_settings(database_url=f"sqlite:///{tmp_path / 'hospital.db'}"))
    yield app
    app.state.engine.dispose()
