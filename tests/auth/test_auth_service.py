"""
Tests for the authentication service layer.
"""
from datetime import timedelta

import pytest

from src.auth.exceptions import DuplicateIdentityException, ForbiddenException, InvalidCredentialsException
from src.auth.models import User, UserRole
from src.core.security import hash_password
from src.exceptions import NotFoundException


def test_register_returns_token_for_new_user(auth_service, token_issuer):
    result = auth_service.register("doc1", "doc1@h.com", "Pw123!", UserRole.DOCTOR)

    assert result.username == "doc1"
    assert result.role == UserRole.DOCTOR
    claims = token_issuer.decode(result.token)
    assert claims.username == "doc1"
    assert result.expires_at - claims.issued_at == timedelta(hours=24)


def test_register_defaults_to_patient_role(auth_service):
    result = auth_service.register("pat1", "pat1@h.com", "Pw123!")
    assert result.role == UserRole.PATIENT


def test_register_stores_hash_not_password(auth_service, db):
    auth_service.register("pat1", "pat1@h.com", "Pw123!")

    user = db.query(User).filter(User.username == "pat1").one()
    assert user.password_hash != "Pw123!"
    assert user.password_hash.startswith("$2")
    assert user.is_active is True
    assert user.created_at is not None


def test_register_rejects_reused_username_or_email(auth_service):
    auth_service.register("doc1", "doc1@h.com", "Pw123!")
    auth_service.register("doc2", "doc2@h.com", "Pw123!")

    with pytest.raises(DuplicateIdentityException):
        auth_service.register("doc1", "other@h.com", "Pw123!")
    with pytest.raises(DuplicateIdentityException):
        auth_service.register("other", "doc2@h.com", "Pw123!")


def test_register_reports_constraint_violation_as_duplicate(auth_service, db):
    auth_service.register("doc1", "doc1@h.com", "Pw123!")
    user = db.query(User).filter(User.username == "doc1").one()
    auth_service.users.deactivate(user)

    # The inactive row is skipped by the check but still holds the unique constraint.
    with pytest.raises(DuplicateIdentityException):
        auth_service.register("doc1", "doc1@h.com", "Pw123!")


def test_login_succeeds_with_username_or_email(auth_service, token_issuer):
    auth_service.register("doc1", "doc1@h.com", "Pw123!", UserRole.DOCTOR)

    by_username = auth_service.login("doc1", "Pw123!")
    by_email = auth_service.login("doc1@h.com", "Pw123!")

    assert token_issuer.decode(by_username.token).username == "doc1"
    assert by_email.username == "doc1"
    assert by_email.role == UserRole.DOCTOR


def test_login_failures_are_indistinguishable(auth_service):
    auth_service.register("doc1", "doc1@h.com", "Pw123!")

    with pytest.raises(InvalidCredentialsException) as wrong_password:
        auth_service.login("doc1", "wrong")
    with pytest.raises(InvalidCredentialsException) as unknown_user:
        auth_service.login("nobody", "Pw123!")

    assert wrong_password.value.status_code == unknown_user.value.status_code == 401
    assert wrong_password.value.detail == unknown_user.value.detail


def test_inactive_user_cannot_log_in(auth_service, db):
    auth_service.register("doc1", "doc1@h.com", "Pw123!")
    auth_service.users.deactivate(db.query(User).filter(User.username == "doc1").one())

    with pytest.raises(InvalidCredentialsException):
        auth_service.login("doc1", "Pw123!")


def test_list_users_excludes_inactive_users(auth_service, db):
    auth_service.register("doc1", "doc1@h.com", "Pw123!", UserRole.DOCTOR)
    auth_service.register("pat1", "pat1@h.com", "Pw123!")
    auth_service.users.deactivate(db.query(User).filter(User.username == "pat1").one())

    users = auth_service.list_users()

    assert [user.username for user in users] == ["doc1"]
    assert "password_hash" not in users[0].model_dump()


def test_list_doctors_only_returns_doctors(auth_service):
    auth_service.register("doc1", "doc1@h.com", "Pw123!", UserRole.DOCTOR)
    auth_service.register("pat1", "pat1@h.com", "Pw123!")

    assert [user.username for user in auth_service.list_doctors()] == ["doc1"]


def test_get_user_by_username(auth_service):
    auth_service.register("doc1", "doc1@h.com", "Pw123!")

    assert auth_service.get_user_by_username("doc1").email == "doc1@h.com"
    with pytest.raises(NotFoundException):
        auth_service.get_user_by_username("nobody")


def test_deactivate_user_only_allows_self(auth_service, token_issuer):
    own = auth_service.register("doc1", "doc1@h.com", "Pw123!")
    auth_service.register("pat1", "pat1@h.com", "Pw123!")
    claims = token_issuer.decode(own.token)
    other_id = auth_service.get_user_by_username("pat1").id

    with pytest.raises(ForbiddenException):
        auth_service.deactivate_user(other_id, claims)

    auth_service.deactivate_user(claims.user_id, claims)
    with pytest.raises(NotFoundException):
        auth_service.get_user_by_username("doc1")
    with pytest.raises(NotFoundException):
        auth_service.deactivate_user(claims.user_id, claims)


def test_register_rejects_username_equal_to_existing_email(auth_service):
    auth_service.register("victim", "victim@h.com", "victimpw")

    with pytest.raises(DuplicateIdentityException):
        auth_service.register("victim@h.com", "attacker@h.com", "attackerpw")

    assert auth_service.login("victim@h.com", "victimpw").username == "victim"


def test_register_rejects_email_equal_to_existing_username(auth_service):
    auth_service.register("victim@h.com", "owner@h.com", "ownerpw")

    with pytest.raises(DuplicateIdentityException):
        auth_service.register("victim", "victim@h.com", "victimpw")


def test_login_prefers_exact_username_match(auth_service):
    auth_service.register("doc1", "doc1@h.com", "Pw123!")
    # Inserted past the registration check, as a row from before it existed would be.
    auth_service.users.add(
        User(username="doc1@h.com", email="other@h.com", password_hash=hash_password("otherpw"))
    )

    result = auth_service.login("doc1@h.com", "otherpw")

    assert result.username == "doc1@h.com"
    assert auth_service.login("doc1", "Pw123!").username == "doc1"
