# =============================================================================
# File: blogapp/db.py
# Purpose: SQLAlchemy engine + session factory, schema reconciliation at start.
# =============================================================================
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

log = logging.getLogger(__name__)

# alembic/ next to the package in a source checkout
MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "alembic"


class Base(DeclarativeBase):
    """Declarative base for ORM models."""
    pass


# Bound in init_db(); one factory for the whole process
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)

engine: Engine | None = None


def _enable_sqlite_fks(dbapi_conn, _record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def _stamp_head(conn: Connection) -> None:
    """
    Record the Alembic head revision on a schema built by create_all.

    Later `alembic upgrade head` runs then start from the current revision
    instead of re-creating existing tables. Databases that already carry a
    revision are left alone.
    """
    if not MIGRATIONS_DIR.is_dir():
        log.debug("No migrations directory at %s, skipping stamp", MIGRATIONS_DIR)
        return

    if MigrationContext.configure(conn).get_current_revision() is not None:
        return

    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # alembic/env.py reuses this connection instead of opening its own
    cfg.attributes["connection"] = conn
    command.stamp(cfg, "head")
    log.info("Stamped database with Alembic head revision")


def init_db(database_url: str) -> Engine:
    """Open the engine (connection pool), bind sessions and create missing tables."""
    global engine

    if engine is not None:
        engine.dispose()

    engine = create_engine(database_url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fks)

    SessionLocal.configure(bind=engine)

    # Import models so metadata sees them before create_all
    from . import models  # noqa: F401
    with engine.begin() as conn:
        Base.metadata.create_all(conn)
        _stamp_head(conn)
    log.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    return engine
