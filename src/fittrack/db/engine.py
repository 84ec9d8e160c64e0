"""SQLModel engine singleton and session dependency."""
from typing import Generator, Optional

from sqlmodel import Session, SQLModel, create_engine

from fittrack.config import get_settings

_engine = None


def _build_engine(database_url: str):
    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite only; safe for FastAPI
    )
    # Import all models so metadata is populated before create_all
    from fittrack.models.activity import Activity, ActivityPathPoint  # noqa
    SQLModel.metadata.create_all(engine)
    return engine


def get_engine(database_url: Optional[str] = None):
    """
    Return an engine with all tables created.

    Without a URL this is the module-level engine for settings.database_url,
    created on first call. An explicit URL always gets its own, uncached engine.
    """
    global _engine
    if database_url is not None:
        return _build_engine(database_url)
    if _engine is None:
        _engine = _build_engine(get_settings().database_url)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a DB session."""
    with Session(get_engine()) as session:
        yield session
