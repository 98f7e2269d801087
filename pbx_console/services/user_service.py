"""
User lifecycle service

Rules:
- An extension is held by at most one active or pending user per company;
  deleted users release it
- Admin adds and edits are active immediately, editor adds and edits go to
  pending until an admin approves them
- Reject removes a pending row outright, delete only marks it deleted
- Permanent delete is admin only and works from any status

The role passed in is the acting session's role. Apart from the permanent
delete check this service trusts it.
"""

from typing import Dict, List, Optional
import uuid

from sqlmodel import Session, select
import structlog

from pbx_console.core.exceptions import (
    AuthorizationError,
    DuplicateExtensionError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from pbx_console.models.account import Account, AccountRole
from pbx_console.models.user import IN_USE_STATUSES, User, UserStatus
from pbx_console.schemas.user import UserCreate, UserUpdate
from pbx_console.services.company_service import get_company
from pbx_console.services.persistence import commit, store_errors

logger = structlog.get_logger(__name__)


def status_for_role(acting_role: AccountRole) -> UserStatus:
    """Editors' changes wait for review, everyone else's apply at once"""
    if acting_role == AccountRole.EDITOR:
        return UserStatus.PENDING
    return UserStatus.ACTIVE


def get_user(db: Session, company_id: uuid.UUID, user_id: uuid.UUID) -> User:
    """Get user by ID within a company"""
    with store_errors(db, "load user"):
        user = db.exec(
            select(User).where(User.id == user_id, User.company_id == company_id)
        ).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _matches(user: User, needle: str) -> bool:
    fields = (user.name, user.extension, user.email, user.outbound_caller_id, user.did)
    return any(needle in (value or "").lower() for value in fields)


def list_company_users(
    db: Session,
    company_id: uuid.UUID,
    search: Optional[str] = None,
) -> Dict[str, List[User]]:
    """Users of a company ordered by extension, split into active / pending / deleted"""
    with store_errors(db, "list users"):
        users = db.exec(
            select(User).where(User.company_id == company_id).order_by(User.extension)
        ).all()

    needle = (search or "").strip().lower()
    grouped: Dict[str, List[User]] = {"active": [], "pending": [], "deleted": []}
    for user in users:
        if needle and not _matches(user, needle):
            continue
        grouped[UserStatus.normalize(user.status).value].append(user)
    return grouped


def find_extension_holders(
    db: Session,
    company_id: uuid.UUID,
    extension: str,
    exclude_user_id: Optional[uuid.UUID] = None,
) -> List[User]:
    """Active or pending users of the company holding exactly this extension"""
    query = select(User).where(
        User.company_id == company_id,
        User.extension == extension,
        User.status.in_(IN_USE_STATUSES),
    )
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)

    with store_errors(db, "check extension uniqueness"):
        return list(db.exec(query).all())


def ensure_extension_available(
    db: Session,
    company_id: uuid.UUID,
    extension: Optional[str],
    exclude_user_id: Optional[uuid.UUID] = None,
) -> None:
    """Raise DuplicateExtensionError when another live user holds the extension"""
    if not extension:
        return
    if find_extension_holders(db, company_id, extension, exclude_user_id):
        raise DuplicateExtensionError(extension)


def _require_name(name: str) -> str:
    if not name:
        raise ValidationError("Name is required.")
    return name


def _remove_editor_accounts(db: Session, user: User) -> None:
    # Credentials never outlive their user
    accounts = db.exec(select(Account).where(Account.user_id == user.id)).all()
    for account in accounts:
        db.delete(account)
    db.flush()


def create_user(
    db: Session,
    company_id: uuid.UUID,
    data: UserCreate,
    acting_role: AccountRole,
) -> User:
    """Add a user, active for admins and pending for editors"""
    name = _require_name(data.name)
    get_company(db, company_id)
    ensure_extension_available(db, company_id, data.extension)

    user = User(
        company_id=company_id,
        name=name,
        extension=data.extension,
        email=data.email,
        outbound_caller_id=data.outbound_caller_id,
        did=data.did,
        status=status_for_role(acting_role),
    )
    db.add(user)
    commit(db, "create user", lambda: DuplicateExtensionError(data.extension))
    db.refresh(user)

    logger.info(f"User created: {user.id} company={company_id} status={user.status.value}")
    return user


def update_user(
    db: Session,
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    data: UserUpdate,
    acting_role: AccountRole,
) -> User:
    """Overwrite a user's profile; editor edits send the user back to review"""
    name = _require_name(data.name)
    user = get_user(db, company_id, user_id)
    ensure_extension_available(db, company_id, data.extension, exclude_user_id=user.id)

    user.apply_edit(
        name=name,
        extension=data.extension,
        email=data.email,
        outbound_caller_id=data.outbound_caller_id,
        did=data.did,
        status=status_for_role(acting_role),
    )
    db.add(user)
    commit(db, "update user", lambda: DuplicateExtensionError(data.extension))
    db.refresh(user)

    logger.info(f"User updated: {user.id} status={user.status.value}")
    return user


def approve_user(db: Session, company_id: uuid.UUID, user_id: uuid.UUID) -> User:
    """Pending -> active"""
    user = get_user(db, company_id, user_id)
    user.approve()
    db.add(user)
    commit(db, "approve user")
    db.refresh(user)
    logger.info(f"User approved: {user.id}")
    return user


def reject_user(db: Session, company_id: uuid.UUID, user_id: uuid.UUID) -> None:
    """Remove a pending user permanently"""
    user = get_user(db, company_id, user_id)
    if not user.can_reject():
        raise InvalidStateError("reject", UserStatus.normalize(user.status).value)

    with store_errors(db, "reject user"):
        _remove_editor_accounts(db, user)
        db.delete(user)
        db.commit()
    logger.info(f"User rejected and removed: {user_id}")


def soft_delete_user(db: Session, company_id: uuid.UUID, user_id: uuid.UUID) -> User:
    """Active or pending -> deleted"""
    user = get_user(db, company_id, user_id)
    user.soft_delete()
    db.add(user)
    commit(db, "soft-delete user")
    db.refresh(user)
    logger.info(f"User soft-deleted: {user.id}")
    return user


def restore_user(db: Session, company_id: uuid.UUID, user_id: uuid.UUID) -> User:
    """Deleted -> active, unless the extension has been taken meanwhile"""
    user = get_user(db, company_id, user_id)
    if not user.can_restore():
        raise InvalidStateError("restore", UserStatus.normalize(user.status).value)
    extension = user.extension
    ensure_extension_available(db, company_id, extension, exclude_user_id=user.id)

    user.restore()
    db.add(user)
    commit(db, "restore user", lambda: DuplicateExtensionError(extension))
    db.refresh(user)
    logger.info(f"User restored: {user.id}")
    return user


def hard_delete_user(
    db: Session,
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    acting_role: AccountRole,
) -> None:
    """Destroy a user row in any status (admin only)"""
    if acting_role != AccountRole.ADMIN:
        raise AuthorizationError("Only admins can delete users permanently.")

    user = get_user(db, company_id, user_id)
    with store_errors(db, "delete user forever"):
        _remove_editor_accounts(db, user)
        db.delete(user)
        db.commit()
    logger.info(f"User deleted forever: {user_id}")
