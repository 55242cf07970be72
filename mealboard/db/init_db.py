# mealboard/db/init_db.py
"""Database initialization utilities."""

from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from mealboard.core.logging import get_logger
from mealboard.models import Base

logger = get_logger(__name__)


def _resolve_engine(engine: Optional[Engine]) -> Engine:
    if engine is not None:
        return engine
    from mealboard.config.database import get_engine
    return get_engine()


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    engine = _resolve_engine(engine)
    existing_tables = set(inspect(engine).get_table_names())
    missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]

    if not missing:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")
        return

    Base.metadata.create_all(bind=engine, tables=missing)
    logger.info(f"Created {len(missing)} tables: {', '.join(t.name for t in missing)}")


def drop_db(engine: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    Base.metadata.drop_all(bind=_resolve_engine(engine))
    logger.warning("All database tables dropped")
