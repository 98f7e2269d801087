"""
Pydantic schemas for editor accounts
"""

from pydantic import BaseModel
from typing import Optional
import uuid


class EditorAccountCreate(BaseModel):
    """Make-editor form"""
    email: str = ""


class EditorAccountResponse(BaseModel):
    """Editor account without credentials"""
    id: uuid.UUID
    user_id: Optional[uuid.UUID]
    company_id: Optional[uuid.UUID]
    email: str
    is_active: bool

    model_config = {"from_attributes": True}


class EditorAccountCreated(BaseModel):
    """Returned once, right after creation"""
    account: EditorAccountResponse
    temp_password: str
