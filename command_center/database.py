"""
Command Center Database Initialization

Owns the engine and session factory for the dashboard store. SQLite is the
default; any SQLAlchemy URL can be supplied through COMMAND_CENTER_DB_URL.
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from command_center.config import DATABASE_URL
from command_center.models import Base

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


_ensure_sqlite_dir(DATABASE_URL)
engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables (additive; existing data is kept)."""
    logger.info("Initializing Command Center database...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Command Center database schema ready")
