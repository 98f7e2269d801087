"""
Alembic migration tests against a throwaway SQLite file
"""

from pathlib import Path
import uuid

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def migrated_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")
    yield url
    command.downgrade(config, "base")


def test_upgrade_creates_tables(migrated_url):
    inspector = inspect(create_engine(migrated_url))

    assert {"companies", "users", "app_accounts"} <= set(inspector.get_table_names())
    user_columns = {c["name"] for c in inspector.get_columns("users")}
    assert {"company_id", "extension", "outbound_caller_id", "did", "status"} <= user_columns

    indexes = {ix["name"]: ix for ix in inspector.get_indexes("users")}
    assert indexes["uq_users_company_extension_in_use"]["unique"]


def test_partial_index_only_counts_live_users(migrated_url):
    engine = create_engine(migrated_url)
    company_id = uuid.uuid4().hex
    insert = text(
        "INSERT INTO users (id, company_id, name, extension, status) "
        "VALUES (:id, :company_id, :name, :extension, :status)"
    )

    with engine.begin() as conn:
        conn.execute(text("INSERT INTO companies (id, name) VALUES (:id, 'Acme')"), {"id": company_id})
        conn.execute(insert, dict(id=uuid.uuid4().hex, company_id=company_id, name="Old", extension="100", status="deleted"))
        conn.execute(insert, dict(id=uuid.uuid4().hex, company_id=company_id, name="Live", extension="100", status="active"))
        conn.execute(insert, dict(id=uuid.uuid4().hex, company_id=company_id, name="A", extension=None, status="active"))
        conn.execute(insert, dict(id=uuid.uuid4().hex, company_id=company_id, name="B", extension=None, status="active"))

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(insert, dict(id=uuid.uuid4().hex, company_id=company_id, name="Dup", extension="100", status="pending"))
