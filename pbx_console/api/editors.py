"""
Editor account API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
import uuid

from pbx_console.core.database import get_session
from pbx_console.core.exceptions import NotFoundError
from pbx_console.core.permissions import Permission, require_company_permission
from pbx_console.schemas.account import EditorAccountCreate, EditorAccountCreated, EditorAccountResponse
from pbx_console.schemas.session import AppSession
from pbx_console.services import editor_accounts, user_service

router = APIRouter()


@router.get("/", response_model=EditorAccountResponse)
def get_editor_account(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.EDITOR_MANAGE)),
    session: Session = Depends(get_session),
):
    """Editor account bound to the user"""
    user_service.get_user(session, company_id, user_id)
    account = editor_accounts.get_editor_account_for_user(session, user_id)
    if account is None:
        raise NotFoundError("Editor account not found")
    return account


@router.post("/", response_model=EditorAccountCreated, status_code=status.HTTP_201_CREATED)
def create_editor_account(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    editor_data: EditorAccountCreate,
    app_session: AppSession = Depends(require_company_permission(Permission.EDITOR_MANAGE)),
    session: Session = Depends(get_session),
):
    """Make the user an editor; the temporary password is shown only here"""
    account, temp_password = editor_accounts.create_editor_account_for_user(
        session, user_id, company_id, editor_data.email
    )
    return EditorAccountCreated(
        account=EditorAccountResponse.model_validate(account),
        temp_password=temp_password,
    )


@router.delete("/")
def remove_editor_account(
    company_id: uuid.UUID,
    user_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_permission(Permission.EDITOR_MANAGE)),
    session: Session = Depends(get_session),
):
    """Remove editor access (the user stays)"""
    user_service.get_user(session, company_id, user_id)
    removed = editor_accounts.remove_editor_account_for_user(session, user_id)
    return {"removed": removed, "message": "Editor access removed."}
