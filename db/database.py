"""
Database connection and session management.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool
from contextlib import contextmanager
import logging

from config import DATABASE_URL, PGAPPNAME

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine, adding PostgreSQL connection settings when relevant."""
    options = {
        # Use NullPool for simplicity in development
        "poolclass": NullPool,
        # Log SQL in debug mode
        "echo": False,
    }
    if database_url.startswith("postgresql"):
        # Set application name for connection tracking
        options["connect_args"] = {"application_name": PGAPPNAME}
    elif database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    options.update(kwargs)
    return create_engine(database_url, **options)


# Engine is created lazily so tests can bind their own before first use
engine = None

# Create session factory
SessionFactory = sessionmaker()


def init_engine(database_url=None, **kwargs) -> Engine:
    """Bind the session factory to a new engine for ``database_url`` (config default if None)."""
    global engine
    engine = build_engine(database_url or DATABASE_URL, **kwargs)
    SessionFactory.configure(bind=engine)
    logger.info(f"Database engine bound to {engine.url.render_as_string(hide_password=True)}")
    return engine


def get_engine() -> Engine:
    """Get the bound engine, creating the default one if needed."""
    if engine is None:
        init_engine()
    return engine


def get_session() -> Session:
    """Get a new database session."""
    get_engine()
    return SessionFactory()


@contextmanager
def get_session_context():
    """Context manager for database sessions with automatic cleanup."""
    session = get_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
