"""
Unit tests for store error translation
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import select

from pbx_console.core.exceptions import DuplicateExtensionError, PersistenceError
from pbx_console.models import Company
from pbx_console.services import company_service
from pbx_console.services.persistence import commit, store_errors


def _store_down(*args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("connection refused"))


def test_commit_failure_becomes_persistence_error(db, monkeypatch):
    """Failed writes roll back and surface the generic message once"""
    calls = []

    def failing_commit():
        calls.append(1)
        _store_down()

    db.add(Company(name="Lost"))
    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(PersistenceError) as exc_info:
        commit(db, "create company")

    assert exc_info.value.message == "Operation failed. Please try again."
    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert len(calls) == 1

    monkeypatch.undo()
    assert db.exec(select(Company)).all() == []


def test_session_usable_after_failure(db, monkeypatch):
    monkeypatch.setattr(db, "commit", _store_down)
    with pytest.raises(PersistenceError):
        company_service.create_company(db, "Initech")
    monkeypatch.undo()

    company = company_service.create_company(db, "Initrode")

    assert [c.name for c in db.exec(select(Company)).all()] == [company.name]


def test_read_failure_becomes_persistence_error(db, monkeypatch):
    monkeypatch.setattr(db, "exec", _store_down)

    with pytest.raises(PersistenceError):
        company_service.list_companies(db)


def test_integrity_error_uses_domain_error(db):
    with pytest.raises(DuplicateExtensionError):
        with store_errors(db, "create user", lambda: DuplicateExtensionError("100")):
            raise IntegrityError("INSERT", {}, Exception("unique"))


def test_integrity_error_without_mapping(db):
    with pytest.raises(PersistenceError):
        with store_errors(db, "create company"):
            raise IntegrityError("INSERT", {}, Exception("unique"))
