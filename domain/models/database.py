"""
Database configuration and session management.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger("potluck.database")

# Create SQLAlchemy Base
Base = declarative_base()

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_engine(database_url: Optional[str] = None) -> Engine:
    """Create the engine and session factory. Called lazily on first use."""
    global _engine, _SessionLocal
    url = database_url or settings.database_url
    kwargs = {"echo": settings.db_echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True
    _engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
    _SessionLocal = sessionmaker(
        bind=_engine, autoflush=False, expire_on_commit=False, future=True
    )
    logger.info("Database engine initialized (%s)", _engine.url.get_backend_name())
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        init_engine()
    return _engine


def SessionLocal():
    """Open a new session bound to the configured engine."""
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal()


def init_database():
    """Initialize database schema"""
    engine = get_engine()
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
