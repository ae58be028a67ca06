from contextlib import contextmanager
from typing import Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import Base

_engines: Dict[str, Engine] = {}


def get_engine(sqlite_path: str) -> Engine:
    """Return the engine for a database file, creating tables on first use."""
    engine = _engines.get(sqlite_path)
    if engine is None:
        engine = create_engine(f"sqlite:///{sqlite_path}", future=True)
        Base.metadata.create_all(engine)
        _engines[sqlite_path] = engine
    return engine


def get_session(sqlite_path: str) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    engine = get_engine(sqlite_path)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(sqlite_path: str) -> Generator[Session, None, None]:
    """
    Context manager for SQLAlchemy sessions.
    
    Rolls back on error and always closes the session. Commits are left
    to the repository functions so each write is explicit.
    
    Usage:
        with session_context(sqlite_path) as session:
            write_value(session, "students", payload)
    """
    session = get_session(sqlite_path)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
