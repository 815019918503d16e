"""SQLAlchemy engine and request sessions for the flashcard store."""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from flashforge.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base shared by the flashcard, generation and error log tables."""


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database_engine(database_url: str) -> Engine:
    """
    Build an engine for ``database_url``.

    SQLite (tests, local runs) gets one shared in-process connection and has
    foreign keys switched on, so deleting a generation detaches its flashcards
    the same way PostgreSQL does. Server databases get a pre-pinged pool.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            pool_size=20,
            max_overflow=30,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def initialize_database(settings: Settings) -> None:
    """Create the engine and session factory. Called from the app lifespan."""
    global _engine, _session_factory  # noqa: PLW0603

    _engine = create_database_engine(settings.DATABASE_URL)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def dispose_engine() -> None:
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    """Return the session factory, creating the engine on first use."""
    if _session_factory is None:
        initialize_database(settings)
    if _session_factory is None:
        raise RuntimeError("Database session factory could not be created")
    return _session_factory


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """One session per request, closed once the response is sent."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
