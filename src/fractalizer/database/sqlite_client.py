from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import create_all


def get_engine(sqlite_path: str) -> Engine:
    """Create an engine for ``sqlite_path`` with the blog tables in place."""
    engine = create_engine(f"sqlite:///{sqlite_path}", future=True)
    create_all(engine)
    return engine


def get_session(engine: Engine) -> Session:
    """Open a session on ``engine`` (caller must close it)."""
    return sessionmaker(bind=engine, autoflush=False)()


@contextmanager
def session_context(sqlite_path: str) -> Generator[Session, None, None]:
    """
    Open a session on a fresh engine for ``sqlite_path``.

    Rolls back on error, then closes the session and disposes of the engine.
    Commits stay explicit: the demo loader commits, read paths never need to.

    Usage:
        with session_context(sqlite_path) as session:
            envelope = get_post(session, ctx, 3, includes="author")
    """
    engine = get_engine(sqlite_path)
    session = get_session(engine)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
