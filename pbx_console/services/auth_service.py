"""
Login and admin account provisioning
"""

from typing import Optional

from sqlmodel import Session, select
import structlog

from pbx_console.core.auth import hash_password, verify_password
from pbx_console.core.config import get_settings
from pbx_console.core.exceptions import ValidationError
from pbx_console.core.session import issue_session
from pbx_console.models.account import Account, AccountRole
from pbx_console.schemas.session import AppSession
from pbx_console.services.persistence import commit, store_errors

logger = structlog.get_logger(__name__)
settings = get_settings()


def login_email(email: Optional[str]) -> str:
    """
    Email as looked up at login.

    Stored editor emails are lowercased but login only trims unless
    LOGIN_EMAIL_CASE_INSENSITIVE is set.
    """
    email = (email or "").strip()
    if settings.LOGIN_EMAIL_CASE_INSENSITIVE:
        email = email.lower()
    return email


def authenticate(db: Session, email: Optional[str], password: Optional[str]) -> Optional[AppSession]:
    """Check credentials and issue a session; None when they do not match"""
    email = login_email(email)
    if not email or not password:
        raise ValidationError("Missing email or password.")

    # Newest account wins when an email was reused
    with store_errors(db, "look up account"):
        account = db.exec(
            select(Account)
            .where(Account.email == email)
            .order_by(Account.created_at.desc())
            .limit(1)
        ).first()

    if not account or not account.is_active or not account.password_hash:
        logger.info("Login rejected: unknown or inactive account")
        return None

    if not verify_password(password, account.password_hash):
        logger.info(f"Login rejected: bad password for account {account.id}")
        return None

    logger.info(f"Account logged in: {account.id} role={account.role.value}")
    return issue_session(account)


def create_admin_account(db: Session, email: str, password: str) -> Account:
    """Provision an admin login (seeding)"""
    email = (email or "").strip()
    if not email or not password:
        raise ValidationError("Missing email or password.")

    account = Account(
        email=email,
        role=AccountRole.ADMIN,
        password_hash=hash_password(password),
        is_active=True,
    )
    db.add(account)
    commit(db, "create admin account")
    db.refresh(account)
    logger.info(f"Admin account created: {account.id}")
    return account
