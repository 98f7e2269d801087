"""
Company API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import uuid

from pbx_console.core.database import get_session
from pbx_console.core.dependencies import require_company_scope
from pbx_console.core.permissions import Permission, require_permission
from pbx_console.schemas.company import CompanyCreate, CompanyResponse, CompanySummary
from pbx_console.schemas.session import AppSession
from pbx_console.services import company_service

router = APIRouter()


@router.get("/", response_model=List[CompanySummary])
def list_companies(
    app_session: AppSession = Depends(require_permission(Permission.COMPANY_LIST)),
    session: Session = Depends(get_session),
):
    """List all companies (admin only)"""
    return company_service.list_companies(session)


@router.post("/", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(
    company: CompanyCreate,
    app_session: AppSession = Depends(require_permission(Permission.COMPANY_MANAGE)),
    session: Session = Depends(get_session),
):
    """Create a new company"""
    return company_service.create_company(session, company.name)


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(
    company_id: uuid.UUID,
    app_session: AppSession = Depends(require_company_scope),
    session: Session = Depends(get_session),
):
    """Get company by ID"""
    return company_service.get_company(session, company_id)


@router.put("/{company_id}", response_model=CompanyResponse)
def rename_company(
    company_id: uuid.UUID,
    company: CompanyCreate,
    app_session: AppSession = Depends(require_permission(Permission.COMPANY_MANAGE)),
    session: Session = Depends(get_session),
):
    """Rename company"""
    return company_service.rename_company(session, company_id, company.name)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_company(
    company_id: uuid.UUID,
    app_session: AppSession = Depends(require_permission(Permission.COMPANY_MANAGE)),
    session: Session = Depends(get_session),
):
    """Delete company together with its users"""
    company_service.delete_company(session, company_id)
