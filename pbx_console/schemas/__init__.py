"""
Schemas module
"""

from pbx_console.schemas.account import EditorAccountCreate, EditorAccountCreated, EditorAccountResponse
from pbx_console.schemas.company import CompanyCreate, CompanyResponse, CompanySummary
from pbx_console.schemas.session import AppSession, LoginRequest, LoginResponse
from pbx_console.schemas.user import (
    CompanyUsersResponse,
    ImportResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    UserUpdateResponse,
)

__all__ = [
    "AppSession",
    "CompanyCreate",
    "CompanyResponse",
    "CompanySummary",
    "CompanyUsersResponse",
    "EditorAccountCreate",
    "EditorAccountCreated",
    "EditorAccountResponse",
    "ImportResponse",
    "LoginRequest",
    "LoginResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    "UserUpdateResponse",
]
