"""Database configuration for the SQL storage backend.

Only used when ``STORAGE_BACKEND=sql``; the default backend keeps
everything in memory.
"""

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine
import logging

# Import models so they're registered with SQLModel.metadata
from .models import Review, Task, User  # noqa: F401

logger = logging.getLogger(__name__)


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a database engine for the given URL."""
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # a single shared connection, otherwise each session gets a fresh empty db
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **kwargs)


def create_db_and_tables(engine: Engine) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)
    logger.info(f"Database tables ready on {engine.url!r}")
