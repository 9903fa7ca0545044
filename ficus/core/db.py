"""
Database session management.

Provides explicit ORM session handling with SQLAlchemy.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ficus.core.config import Config
from ficus.core.models import Base

# One engine per database file for the life of the process
_engines: Dict[str, Engine] = {}


def get_engine(config: Config) -> Engine:
    """
    Get the SQLAlchemy engine for the configured database.

    Uses SQLite with WAL mode. The first call for a database file
    creates missing tables; later calls reuse the same engine.
    """
    db_path = Path(config.database_path).resolve()
    engine = _engines.get(str(db_path))
    if engine is not None:
        return engine

    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )

    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    Base.metadata.create_all(engine)

    _engines[str(db_path)] = engine
    return engine


def init_db(config: Config) -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist.
    """
    get_engine(config)


def get_session(config: Config) -> Session:
    """
    Create a new database session.

    Objects stay readable after commit so they can be
    returned from session_scope blocks.
    """
    SessionLocal = sessionmaker(bind=get_engine(config), expire_on_commit=False)
    return SessionLocal()


@contextmanager
def session_scope(config: Config) -> Generator[Session, None, None]:
    """
    Provide transactional scope around a series of operations.

    Usage:
        with session_scope(config) as session:
            session.add(trade)
    """
    session = get_session(config)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
