"""
Company model - the tenant that owns a set of users
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
import uuid

from pbx_console.models.base import utc_now


class Company(SQLModel, table=True):
    """Company (tenant) owning phone-system users"""

    __tablename__ = "companies"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, nullable=False, max_length=255)

    created_at: datetime = Field(default_factory=utc_now)
