"""
Company management (admin only)
"""

from typing import List
import uuid

from sqlalchemy import func
from sqlmodel import Session, select
import structlog

from pbx_console.core.exceptions import NotFoundError, ValidationError
from pbx_console.models.account import Account
from pbx_console.models.company import Company
from pbx_console.models.user import User, UserStatus
from pbx_console.schemas.company import CompanySummary
from pbx_console.services.persistence import commit, store_errors

logger = structlog.get_logger(__name__)

# Users an admin still has to look at
REVIEW_STATUSES = (UserStatus.PENDING, UserStatus.DELETED)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Company name is required.")
    return name


def get_company(db: Session, company_id: uuid.UUID) -> Company:
    """Get company by ID"""
    with store_errors(db, "load company"):
        company = db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company not found")
    return company


def list_companies(db: Session) -> List[CompanySummary]:
    """List companies by name, each with its pending + deleted user count"""
    with store_errors(db, "list companies"):
        companies = db.exec(select(Company).order_by(Company.name)).all()
        counts = dict(
            db.exec(
                select(User.company_id, func.count(User.id))
                .where(User.status.in_(REVIEW_STATUSES))
                .group_by(User.company_id)
            ).all()
        )

    return [
        CompanySummary(id=c.id, name=c.name, review_count=counts.get(c.id, 0))
        for c in companies
    ]


def create_company(db: Session, name: str) -> Company:
    """Create a new company"""
    company = Company(name=_clean_name(name))
    db.add(company)
    commit(db, "create company")
    db.refresh(company)
    logger.info(f"Company created: {company.id}")
    return company


def rename_company(db: Session, company_id: uuid.UUID, name: str) -> Company:
    """Update company name"""
    name = _clean_name(name)
    company = get_company(db, company_id)
    company.name = name
    db.add(company)
    commit(db, "rename company")
    db.refresh(company)
    logger.info(f"Company renamed: {company_id}")
    return company


def delete_company(db: Session, company_id: uuid.UUID) -> None:
    """Delete company with its editor accounts and users"""
    company = get_company(db, company_id)

    with store_errors(db, "delete company"):
        accounts = db.exec(select(Account).where(Account.company_id == company_id)).all()
        for account in accounts:
            db.delete(account)
        db.flush()

        users = db.exec(select(User).where(User.company_id == company_id)).all()
        for user in users:
            db.delete(user)
        db.flush()

        db.delete(company)
        db.commit()

    logger.info(f"Company deleted: {company_id} ({len(users)} users, {len(accounts)} accounts)")
