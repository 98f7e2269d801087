"""
Database configuration and session management

The schema is owned by the Alembic migrations under alembic/.
"""

from typing import Generator

from sqlmodel import Session, create_engine

from pbx_console.core.config import get_settings

settings = get_settings()

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)


def get_session() -> Generator[Session, None, None]:
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session
