"""
Pet Adoption API — Database Engine & Declarative Base
======================================================

What:  Async SQLAlchemy engine construction and the ORM declarative base.
How:   `build_engine()` creates an async engine with connection pooling
       sized from settings; the RecordStore (store.py) wraps that engine.
Who:   Called once by the app factory; `Base.metadata` is read by Alembic
       and by the test fixtures that create tables.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (tests, local experiments) use SQLAlchemy's default pool for
    the aiosqlite driver, which does not accept the sizing arguments.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from adoption_api.config import Settings, settings as default_settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models are only used for their table definitions: the record store
    gateway issues Core statements against `Model.__table__` and hands
    plain dicts back to the repositories.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(
    database_url: Optional[str] = None,
    config: Optional[Settings] = None,
) -> AsyncEngine:
    """
    Create the async engine for the record store.

    Args:
        database_url: Overrides `config.database_url` (used by tests)
        config: Settings to size the pool from (defaults to the singleton)

    Returns:
        An AsyncEngine. No connection is opened until the first query.
    """
    config = config or default_settings
    url = database_url or config.database_url

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=config.log_level == "DEBUG")

    return create_async_engine(
        url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        pool_recycle=3600,
        # SQL logging is only useful while debugging queries
        echo=config.log_level == "DEBUG",
    )
