"""
Database - Engine and Session Setup

Creates the SQLAlchemy engine and session factory for the location store.
Uses SQLite by default, any SQLAlchemy URL via LOCI_DATABASE_URL.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from loci import settings
from loci.storage.models import Base


logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("itineraries", "locations", "reviews")


def get_engine(url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for database connection.

    Args:
        url: Database URL (defaults to settings.get_database_url())

    Returns:
        SQLAlchemy Engine instance
    """
    db_url = url or settings.get_database_url()

    if db_url.startswith("sqlite"):
        engine = create_engine(db_url, echo=False)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory whose objects stay readable after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Initialize database schema if tables don't exist.

    Safe to call multiple times - only creates missing tables.

    Raises:
        RuntimeError: if existing tables lack the SuperMemo columns
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())

    if not set(REQUIRED_TABLES) <= existing_tables:
        Base.metadata.create_all(engine)
        logger.info("Created tables in %s", engine.url)
        return

    location_columns = {col["name"] for col in inspector.get_columns("locations")}
    required = {"ease_factor", "interval_days", "repetition_count", "next_review"}
    if not required <= location_columns:
        raise RuntimeError(
            "locations table is missing scheduling columns "
            f"{sorted(required - location_columns)}. "
            "Please reset or migrate the database."
        )


def reset_db(engine: Engine) -> None:
    """
    DANGEROUS: Delete all data and recreate tables.

    All itineraries and review history will be lost!
    """
    Base.metadata.drop_all(engine)
    logger.warning("All tables dropped in %s", engine.url)
    init_db(engine)
