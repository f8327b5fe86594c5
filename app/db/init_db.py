"""
Database initialization.

Creates all tables directly from the SQLModel metadata.  Production
databases are migrated with Alembic instead.
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

import app.db.base  # noqa: F401  (registers every model on the metadata)
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """Create every table that does not exist yet."""
    engine = engine or default_engine
    logger.info("Creating database tables on %s", engine.url.render_as_string(hide_password=True))
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created: %s", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    init_db()
