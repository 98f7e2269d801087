"""
Store error translation shared by the services
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session
import structlog

from pbx_console.core.exceptions import ConsoleError, PersistenceError

logger = structlog.get_logger(__name__)


@contextmanager
def store_errors(
    db: Session,
    action: str,
    on_integrity_error: Optional[Callable[[], ConsoleError]] = None,
) -> Iterator[None]:
    """
    Translate SQLAlchemy failures raised inside the block.

    Constraint violations become the error built by on_integrity_error when
    given; everything else becomes PersistenceError. The session is rolled
    back either way and nothing is retried.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if on_integrity_error is not None:
            logger.info(f"Constraint rejected {action}: {e.orig}")
            raise on_integrity_error() from e
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError() from e


def commit(
    db: Session,
    action: str,
    on_integrity_error: Optional[Callable[[], ConsoleError]] = None,
) -> None:
    """Commit the unit of work with store error translation"""
    with store_errors(db, action, on_integrity_error):
        db.commit()
