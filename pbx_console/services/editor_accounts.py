"""
Editor account provisioning

An editor account is a login bound to exactly one user, acting inside that
user's company. Its temporary password is handed back once at creation and
only the hash is stored.
"""

from typing import Optional, Tuple
import uuid

from sqlmodel import Session, select
import structlog

from pbx_console.core.auth import generate_temp_password, hash_password
from pbx_console.core.exceptions import EditorAccountExistsError, ValidationError
from pbx_console.models.account import Account, AccountRole
from pbx_console.services.persistence import commit, store_errors
from pbx_console.services.user_service import get_user

logger = structlog.get_logger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def get_editor_account_for_user(db: Session, user_id: uuid.UUID) -> Optional[Account]:
    """Editor account bound to the user, if any"""
    with store_errors(db, "load editor account"):
        return db.exec(select(Account).where(Account.user_id == user_id)).first()


def create_editor_account_for_user(
    db: Session,
    user_id: uuid.UUID,
    company_id: uuid.UUID,
    email: str,
) -> Tuple[Account, str]:
    """
    Create the editor login for a user.

    Returns the account and its temporary password. The password is not
    stored and cannot be fetched again.
    """
    normalized_email = normalize_email(email)
    if not normalized_email:
        raise ValidationError("Editor email is required.")

    get_user(db, company_id, user_id)
    if get_editor_account_for_user(db, user_id) is not None:
        raise EditorAccountExistsError()

    temp_password = generate_temp_password()
    account = Account(
        user_id=user_id,
        company_id=company_id,
        email=normalized_email,
        role=AccountRole.EDITOR,
        password_hash=hash_password(temp_password),
        is_active=True,
    )
    db.add(account)
    # Unique user_id settles concurrent creators
    commit(db, "create editor account", EditorAccountExistsError)
    db.refresh(account)

    logger.info(f"Editor account created: {account.id} for user {user_id}")
    return account, temp_password


def remove_editor_account_for_user(db: Session, user_id: uuid.UUID) -> bool:
    """Delete the user's editor login; returns False when there was none"""
    with store_errors(db, "remove editor account"):
        accounts = db.exec(select(Account).where(Account.user_id == user_id)).all()
        for account in accounts:
            db.delete(account)
        db.commit()

    if accounts:
        logger.info(f"Editor account removed for user {user_id}")
    return bool(accounts)
