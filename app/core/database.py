"""Database handle, declarative base and session dependency."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.logging import get_logger
from app.models.geometry import register_sqlite_functions

logger = get_logger("database")


# Base class for models
class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def _on_sqlite_connect(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    register_sqlite_functions(dbapi_connection)


class Database:
    """Owns the engine and session factory for one database.

    Built once at process start and disposed at shutdown; request handlers get
    sessions through :func:`get_db`.
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        self.engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _on_sqlite_connect)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create all tables known to the metadata."""
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session scope for scripts: commit on success, roll back on error."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        """Close pooled connections."""
        logger.info("Disposing database engine for %s", self.engine.url.render_as_string())
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
