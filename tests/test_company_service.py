"""
Unit tests for company management
"""

import uuid

import pytest
from sqlmodel import select

from pbx_console.core.exceptions import NotFoundError, ValidationError
from pbx_console.models import Account, Company, User, UserStatus
from pbx_console.services import company_service


def test_create_company_trims_name(db):
    company = company_service.create_company(db, "  Initech  ")

    assert company.name == "Initech"
    assert company.id is not None


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_company_requires_name(db, name):
    with pytest.raises(ValidationError, match="Company name is required."):
        company_service.create_company(db, name)


def test_list_companies_with_review_count(db, company, other_company, make_user):
    make_user(company, extension="100")
    make_user(company, extension="101", status=UserStatus.PENDING)
    make_user(company, extension="102", status=UserStatus.DELETED)
    make_user(other_company, extension="100")

    summaries = company_service.list_companies(db)

    assert [s.name for s in summaries] == ["Acme Telecom", "Globex"]
    assert summaries[0].review_count == 2
    assert summaries[1].review_count == 0


def test_rename_company(db, company):
    renamed = company_service.rename_company(db, company.id, " Acme Voice ")

    assert renamed.name == "Acme Voice"


def test_rename_company_requires_name(db, company):
    with pytest.raises(ValidationError):
        company_service.rename_company(db, company.id, "")

    db.refresh(company)
    assert company.name == "Acme Telecom"


def test_get_missing_company(db):
    with pytest.raises(NotFoundError, match="Company not found"):
        company_service.get_company(db, uuid.uuid4())


def test_delete_company_cascades(db, company, other_company, make_user, editor_account):
    make_user(company, extension="100")
    survivor = make_user(other_company, extension="100")
    company_id = company.id

    company_service.delete_company(db, company_id)

    assert db.get(Company, company_id) is None
    assert db.exec(select(User).where(User.company_id == company_id)).all() == []
    assert db.exec(select(Account).where(Account.company_id == company_id)).all() == []
    assert db.get(User, survivor.id) is not None
