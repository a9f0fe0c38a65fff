from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, DeclarativeBase

from .settings import settings


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _connect_args(url: str) -> dict:
    # SQLite connections are shared with the TestClient worker thread
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def init_engine(database_url: str | None = None) -> Engine:
    global _engine, _session_factory
    url = database_url or settings.database_url
    _engine = create_engine(url, pool_pre_ping=True, connect_args=_connect_args(url))
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    if _session_factory is None:
        init_engine()
    return _session_factory


def get_db():
    """Request-scoped session; closed when the response is sent."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
