"""
Test configuration for pytest
"""

import os

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_JSON"] = "false"

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import pbx_console.models  # noqa: F401
from pbx_console.core.config import get_settings
from pbx_console.core.database import get_session
from pbx_console.core.session import encode_session_cookie, issue_session
from pbx_console.main import app
from pbx_console.models import Account, AccountRole, Company, User, UserStatus
from pbx_console.services.auth_service import create_admin_account

settings = get_settings()

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"


# Create test engine using in-memory SQLite shared by every connection
test_engine = create_engine(
    "sqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """API client sharing the test database session"""
    def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# Fixtures
@pytest.fixture
def company(db: Session) -> Company:
    """Create a test company"""
    company = Company(name="Acme Telecom")
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def other_company(db: Session) -> Company:
    """Create a second company"""
    company = Company(name="Globex")
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def make_user(db: Session):
    """Factory inserting users directly, bypassing the lifecycle service"""
    def _make_user(company: Company, extension="100", status=UserStatus.ACTIVE, **fields) -> User:
        user = User(
            company_id=company.id,
            name=fields.pop("name", f"User {extension}"),
            extension=extension,
            status=status,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def admin_account(db: Session) -> Account:
    """Create an admin login"""
    return create_admin_account(db, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def editor_account(db: Session, company: Company, make_user) -> Account:
    """Create an editor login bound to a user of the test company"""
    user = make_user(company, extension="900", name="Company Editor")
    account = Account(
        user_id=user.id,
        company_id=company.id,
        email="editor@acme.test",
        role=AccountRole.EDITOR,
        password_hash="unused",
        is_active=True,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def login_as(test_client: TestClient, account: Account) -> TestClient:
    """Put the account's session cookie on the client"""
    test_client.cookies.set(
        settings.SESSION_COOKIE_NAME,
        encode_session_cookie(issue_session(account)),
    )
    return test_client


@pytest.fixture
def admin_client(client: TestClient, admin_account: Account) -> TestClient:
    return login_as(client, admin_account)


@pytest.fixture
def editor_client(client: TestClient, editor_account: Account) -> TestClient:
    return login_as(client, editor_account)
