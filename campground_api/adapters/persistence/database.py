# campground_api/adapters/persistence/database.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

# ---------------------------------------------------------------------------
# Engine / Session factory
# ---------------------------------------------------------------------------


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build the SQLAlchemy engine for `database_url`.

    SQLite needs `check_same_thread=False` because FastAPI runs sync
    handlers in a thread pool; in-memory SQLite additionally needs a single
    shared connection or every session would see an empty database.
    """
    connect_args: dict[str, object] = {}
    kwargs: dict[str, object] = {}

    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    return create_engine(
        database_url,
        echo=echo,
        future=True,
        connect_args=connect_args,
        **kwargs,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        class_=Session,
    )


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def ping(engine: Engine) -> bool:
    """Returns True if the database answers `SELECT 1`."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True


# ---------------------------------------------------------------------------
# Unit of work
# ---------------------------------------------------------------------------

@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """
    One transaction per unit of work outside a request (CLI commands,
    scripts): commit on success, roll back on any exception.

        with session_scope(factory) as session:
            ...
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "ping",
    "session_scope",
]
