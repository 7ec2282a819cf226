from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.settings import get_settings


class Base(DeclarativeBase):
    pass


def create_db_engine(url: Optional[str] = None) -> Engine:
    """Create a SQLAlchemy engine; SQLite gets thread-sharing enabled for FastAPI."""
    url = url or get_settings().database_url
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url == "sqlite://":
            # one shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def init_db(engine: Engine):
    """Bind the session factory to an engine and create missing tables."""
    from . import models  # noqa: F401  (registers tables on Base.metadata)

    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
