"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def _connect_args(database_url: str) -> dict[str, object]:
    # SQLite connections are shared across FastAPI's threadpool workers.
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


class Database:
    """Own the engine and session factory of the document record store.

    A single instance is created per application and attached to
    ``app.state.database``; request handlers receive sessions through
    :func:`get_db` instead of importing a module level engine.
    """

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.url = database_url
        self.engine: Engine = create_engine(
            database_url,
            connect_args=_connect_args(database_url),
            pool_pre_ping=True,
            echo=echo,
        )
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def create_all(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from app.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)
        logger.info(
            "Database ready at %s", self.engine.url.render_as_string(hide_password=True)
        )

    def drop_all(self) -> None:
        """Drop every table known to the ORM metadata."""

        Base.metadata.drop_all(bind=self.engine, checkfirst=True)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a session and close it afterwards."""

        session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        """Close every pooled connection."""

        self.engine.dispose()
        logger.info("Database connections closed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session bound to the application's database handle."""

    database: Database = request.app.state.database
    with database.session() as session:
        yield session


__all__ = ["Base", "Database", "get_db"]
