"""
User model - a company's phone extension, with its lifecycle state machine
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, Index, Enum as SQLEnum, text
from datetime import datetime
from typing import Optional, Union
from enum import Enum
import uuid

from pbx_console.core.exceptions import InvalidStateError
from pbx_console.models.base import utc_now


class UserStatus(str, Enum):
    """Lifecycle status of a user"""
    ACTIVE = "active"       # Live extension
    PENDING = "pending"     # Added or edited by an editor, waiting for admin
    DELETED = "deleted"     # Soft deleted, restorable

    @classmethod
    def normalize(cls, value: Union["UserStatus", str, None]) -> "UserStatus":
        """Missing status means active"""
        if value is None or value == "":
            return cls.ACTIVE
        return cls(value)


# Statuses that hold an extension for uniqueness purposes
IN_USE_STATUSES = (UserStatus.ACTIVE, UserStatus.PENDING)


class User(SQLModel, table=True):
    """Phone-system user scoped to a company"""

    __tablename__ = "users"
    __table_args__ = (
        # One live holder per extension per company, deleted rows excluded
        Index(
            "uq_users_company_extension_in_use",
            "company_id",
            "extension",
            unique=True,
            postgresql_where=text("status <> 'deleted' AND extension IS NOT NULL"),
            sqlite_where=text("status <> 'deleted' AND extension IS NOT NULL"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True, description="Owning company")

    # Profile
    name: str = Field(nullable=False, max_length=255)
    extension: Optional[str] = Field(default=None, index=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)
    outbound_caller_id: Optional[str] = Field(default=None, max_length=64)
    did: Optional[str] = Field(default=None, max_length=64)

    status: UserStatus = Field(
        default=UserStatus.ACTIVE,
        sa_column=Column(
            SQLEnum(
                UserStatus,
                name="user_status",
                native_enum=False,
                length=16,
                values_callable=lambda statuses: [s.value for s in statuses],
            ),
            nullable=False,
            index=True,
            default=UserStatus.ACTIVE.value,
        ),
    )

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    # State machine methods
    def is_in_use(self) -> bool:
        """Check if this row holds its extension"""
        return UserStatus.normalize(self.status) in IN_USE_STATUSES

    def can_approve(self) -> bool:
        return UserStatus.normalize(self.status) == UserStatus.PENDING

    def can_reject(self) -> bool:
        return UserStatus.normalize(self.status) == UserStatus.PENDING

    def can_soft_delete(self) -> bool:
        return self.is_in_use()

    def can_restore(self) -> bool:
        return UserStatus.normalize(self.status) == UserStatus.DELETED

    def approve(self) -> None:
        """Transition pending user to active (admin accepts)"""
        if not self.can_approve():
            raise InvalidStateError("approve", UserStatus.normalize(self.status).value)

        self.status = UserStatus.ACTIVE
        self.updated_at = utc_now()

    def soft_delete(self) -> None:
        """Transition active or pending user to deleted"""
        if not self.can_soft_delete():
            raise InvalidStateError("delete", UserStatus.normalize(self.status).value)

        self.status = UserStatus.DELETED
        self.updated_at = utc_now()

    def restore(self) -> None:
        """Transition deleted user back to active"""
        if not self.can_restore():
            raise InvalidStateError("restore", UserStatus.normalize(self.status).value)

        self.status = UserStatus.ACTIVE
        self.updated_at = utc_now()

    def apply_edit(
        self,
        name: str,
        extension: Optional[str],
        email: Optional[str],
        outbound_caller_id: Optional[str],
        did: Optional[str],
        status: UserStatus,
    ) -> None:
        """Overwrite profile fields in place and set the review status"""
        self.name = name
        self.extension = extension
        self.email = email
        self.outbound_caller_id = outbound_caller_id
        self.did = did
        self.status = status
        self.updated_at = utc_now()
