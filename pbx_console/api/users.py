"""
Company users API endpoints
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel import Session
from typing import Optional
import uuid

from pbx_console.core.database import get_session
from pbx_console.core.permissions import Permission, require_company_permission
from pbx_console.models.user import User, UserStatus
from pbx_console.schemas.session import AppSession
from pbx_console.schemas.user import (
    CompanyUsersResponse,
    ImportResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    UserUpdateResponse,
)
from pbx_console.services import csv_import, user_service

router = APIRouter()


def _to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


@router.get("/", response_model=CompanyUsersResponse)
def list_users(
    company_id: uuid.UUID,
    search: Optional[str] = None,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_VIEW)),
    session: Session = Depends(get_session),
):
    """Company users split into active, pending and deleted"""
    grouped = user_service.list_company_users(session, company_id, search)
    return CompanyUsersResponse(
        **{key: [_to_response(u) for u in users] for key, users in grouped.items()}
    )


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    company_id: uuid.UUID,
    user_data: UserCreate,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_CREATE)),
    session: Session = Depends(get_session),
):
    """Add a user (pending review when added by an editor)"""
    user = user_service.create_user(session, company_id, user_data, app_session.role)
    return _to_response(user)


@router.post("/import", response_model=ImportResponse)
def import_users(
    company_id: uuid.UUID,
    file: UploadFile = File(...),
    app_session: AppSession = Depends(require_company_permission(Permission.USER_IMPORT)),
    session: Session = Depends(get_session),
):
    """Import users from a CSV export"""
    raw = file.file.read()
    result = csv_import.import_users_from_csv(session, company_id, raw.decode("utf-8-sig"))
    return ImportResponse(inserted=result.inserted, skipped=result.skipped, message=result.message)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_VIEW)),
    session: Session = Depends(get_session),
):
    """Get user by ID"""
    return _to_response(user_service.get_user(session, company_id, user_id))


@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    user_data: UserUpdate,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_EDIT)),
    session: Session = Depends(get_session),
):
    """Edit a user; the acting role comes from the session"""
    user = user_service.update_user(session, company_id, user_id, user_data, app_session.role)
    if user.status == UserStatus.PENDING:
        message = "Changes saved and sent for admin approval."
    else:
        message = "User updated successfully."
    return UserUpdateResponse(user=_to_response(user), message=message)


@router.post("/{user_id}/approve", response_model=UserResponse)
def approve_user(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_APPROVE)),
    session: Session = Depends(get_session),
):
    """Approve a pending user"""
    return _to_response(user_service.approve_user(session, company_id, user_id))


@router.post("/{user_id}/reject")
def reject_user(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_REJECT)),
    session: Session = Depends(get_session),
):
    """Reject a pending user (removes the row)"""
    user_service.reject_user(session, company_id, user_id)
    return {"message": "User rejected and removed."}


@router.post("/{user_id}/delete", response_model=UserResponse)
def soft_delete_user(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_SOFT_DELETE)),
    session: Session = Depends(get_session),
):
    """Soft delete a user"""
    return _to_response(user_service.soft_delete_user(session, company_id, user_id))


@router.post("/{user_id}/restore", response_model=UserResponse)
def restore_user(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_RESTORE)),
    session: Session = Depends(get_session),
):
    """Restore a soft-deleted user"""
    return _to_response(user_service.restore_user(session, company_id, user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_forever(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.USER_HARD_DELETE)),
    session: Session = Depends(get_session),
):
    """Permanently delete a user (admin only)"""
    user_service.hard_delete_user(session, company_id, user_id, app_session.role)
