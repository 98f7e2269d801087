"""
Pydantic schemas for the login session
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from pbx_console.models.account import AccountRole


class AppSession(BaseModel):
    """Authenticated identity carried in the session cookie"""
    model_config = ConfigDict(populate_by_name=True)

    account_id: str = Field(..., alias="accountId", description="Account ID")
    user_id: Optional[str] = Field(default=None, alias="userId", description="Bound user (editors only)")
    company_id: Optional[str] = Field(default=None, alias="companyId", description="Scoped company (editors only)")
    role: AccountRole = Field(..., description="Account role")

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    @property
    def is_editor(self) -> bool:
        return self.role == AccountRole.EDITOR


class LoginRequest(BaseModel):
    """Login form"""
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    """Login result"""
    ok: bool = True
    role: AccountRole
    company_id: Optional[str] = Field(default=None, serialization_alias="companyId")
