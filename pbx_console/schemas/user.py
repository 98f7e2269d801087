"""
Pydantic schemas for users
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
import uuid

from pbx_console.models.user import UserStatus


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class UserFields(BaseModel):
    """Editable user profile"""
    name: str = ""
    extension: Optional[str] = None
    email: Optional[str] = None
    outbound_caller_id: Optional[str] = None
    did: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> str:
        return (value or "").strip()

    @field_validator("extension", "email", "outbound_caller_id", "did", mode="before")
    @classmethod
    def blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class UserCreate(UserFields):
    """User add form"""
    pass


class UserUpdate(UserFields):
    """User edit form"""
    pass


class UserResponse(BaseModel):
    """User response model"""
    id: uuid.UUID
    company_id: uuid.UUID
    name: str
    extension: Optional[str]
    email: Optional[str]
    outbound_caller_id: Optional[str]
    did: Optional[str]
    status: UserStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class CompanyUsersResponse(BaseModel):
    """Company users partitioned by status"""
    active: List[UserResponse] = Field(default_factory=list)
    pending: List[UserResponse] = Field(default_factory=list)
    deleted: List[UserResponse] = Field(default_factory=list)


class UserUpdateResponse(BaseModel):
    """Edit outcome"""
    user: UserResponse
    message: str


class ImportResponse(BaseModel):
    """CSV import outcome"""
    inserted: int
    skipped: int
    message: str
