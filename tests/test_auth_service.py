"""
Unit tests for login and password utilities
"""

import pytest

from pbx_console.core.auth import generate_temp_password, hash_password, verify_password
from pbx_console.core.config import get_settings
from pbx_console.core.exceptions import ValidationError
from pbx_console.models import AccountRole
from pbx_console.services import auth_service
from pbx_console.services.editor_accounts import create_editor_account_for_user

settings = get_settings()


def test_password_hashing():
    hashed = hash_password("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


@pytest.mark.parametrize("password,password_hash", [("", "x"), ("x", ""), ("x", "not-a-hash")])
def test_verify_password_fails_closed(password, password_hash):
    assert verify_password(password, password_hash) is False


def test_temp_passwords_differ():
    assert len(generate_temp_password(16)) == 16
    assert generate_temp_password() != generate_temp_password()


def test_authenticate_admin(db, admin_account):
    session = auth_service.authenticate(db, " admin@example.com ", "admin-password")

    assert session is not None
    assert session.role == AccountRole.ADMIN
    assert session.account_id == str(admin_account.id)
    assert session.company_id is None


def test_authenticate_editor(db, company, make_user):
    user = make_user(company, extension="100")
    account, temp_password = create_editor_account_for_user(db, user.id, company.id, "ed@acme.test")

    session = auth_service.authenticate(db, "ed@acme.test", temp_password)

    assert session.role == AccountRole.EDITOR
    assert session.company_id == str(company.id)
    assert session.user_id == str(user.id)


def test_wrong_password(db, admin_account):
    assert auth_service.authenticate(db, "admin@example.com", "nope") is None


def test_unknown_email(db):
    assert auth_service.authenticate(db, "nobody@example.com", "whatever") is None


@pytest.mark.parametrize("email,password", [("", "x"), ("a@b.c", ""), (None, None), ("   ", "x")])
def test_missing_credentials(db, email, password):
    with pytest.raises(ValidationError, match="Missing email or password."):
        auth_service.authenticate(db, email, password)


def test_inactive_account_rejected(db, admin_account):
    admin_account.is_active = False
    db.add(admin_account)
    db.commit()

    assert auth_service.authenticate(db, "admin@example.com", "admin-password") is None


def test_email_case_sensitive_by_default(db, admin_account):
    assert auth_service.authenticate(db, "ADMIN@example.com", "admin-password") is None


def test_email_case_insensitive_flag(db, admin_account, monkeypatch):
    monkeypatch.setattr(auth_service.settings, "LOGIN_EMAIL_CASE_INSENSITIVE", True)

    assert auth_service.authenticate(db, "ADMIN@Example.com", "admin-password") is not None


def test_newest_account_wins(db):
    auth_service.create_admin_account(db, "shared@example.com", "old-password")
    auth_service.create_admin_account(db, "shared@example.com", "new-password")

    assert auth_service.authenticate(db, "shared@example.com", "new-password") is not None
    assert auth_service.authenticate(db, "shared@example.com", "old-password") is None


def test_temp_password_default_length():
    assert len(generate_temp_password(None)) == settings.TEMP_PASSWORD_LENGTH
    assert len(generate_temp_password()) == settings.TEMP_PASSWORD_LENGTH
