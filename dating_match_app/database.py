"""
Database engine, session factory and declarative base
"""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings


Base = declarative_base()

_engine = None
_SessionLocal = None


def get_engine():
    """Get (and lazily create) the application engine"""
    global _engine, _SessionLocal
    if _engine is None:
        settings = get_settings()
        connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
        _engine = create_engine(settings.database_url, connect_args=connect_args)
        _SessionLocal = sessionmaker(bind=_engine, autocommit=False, autoflush=False, expire_on_commit=False)
    return _engine


def get_session() -> Session:
    """Create a new database session"""
    get_engine()
    return _SessionLocal()


@contextmanager
def get_db_context() -> Iterator[Session]:
    """
    Provide a transactional session scope

    Commits on success, rolls back and re-raises on error.
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create all tables"""
    # Import models so they register with Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
