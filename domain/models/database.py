"""
Database configuration and session management.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import settings
from app.exceptions import TransactionError

logger = logging.getLogger("nutritrack.database")

# Create SQLAlchemy Base
Base = declarative_base()

_connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

# Create engine
engine = create_engine(
    settings.database_url, echo=settings.db_echo, future=True, connect_args=_connect_args
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database():
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a block of writes as one unit of work on the given session.

    Commits when the block finishes. Any exception rolls the whole unit back;
    storage-level errors are re-raised as TransactionError, everything else
    (typed service errors included) propagates unchanged.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Transaction rolled back after storage error")
        raise TransactionError(details={"reason": exc.__class__.__name__}) from exc
    except Exception:
        db.rollback()
        raise
