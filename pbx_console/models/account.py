"""
Account model - login credentials for admins and editors
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from pbx_console.models.base import utc_now


class AccountRole(str, Enum):
    """Account roles for RBAC"""
    ADMIN = "admin"
    EDITOR = "editor"


class Account(SQLModel, table=True):
    """
    Login credential.

    Admin accounts are not bound to a user or company. Editor accounts are
    bound to exactly one user and act only inside that user's company.
    """

    __tablename__ = "app_accounts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="users.id",
        unique=True,
        nullable=True,
        description="User this editor login belongs to",
    )
    company_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="companies.id",
        index=True,
        nullable=True,
    )

    # Authentication
    email: str = Field(index=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)

    role: AccountRole = Field(default=AccountRole.EDITOR, nullable=False)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)
