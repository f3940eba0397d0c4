"""
Database engine and session management.

One DatabaseManager instance (``db``) owns the engine for the process:

    from core.db import db

    db.initialize()
    with db.session() as session:
        UserRepository(session).get_by_email("jane@example.com")

FastAPI routes receive a request-scoped session through ``get_db``; it
commits when the handler returns and rolls back when it raises.
"""

import time
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings
from .logging import db_logger


class Base(DeclarativeBase):
    """Declarative base shared by every model."""


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    Without it SQLite accepts domains whose owner does not exist and
    ignores ON DELETE CASCADE.
    """

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str) -> Engine:
    """
    Create an engine suited to the backend in ``url``.

    SQLite gets a single shared connection (StaticPool) so in-memory
    databases survive across sessions; everything else gets a QueuePool
    sized from settings.
    """
    settings = get_settings()

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.debug,
    )


class DatabaseManager:
    """Holds the engine and session factory once initialize() has run."""

    def __init__(self):
        self.engine: Engine | None = None
        self.SessionLocal: sessionmaker[Session] | None = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine. Later calls are no-ops until reset()."""
        if self.is_initialized:
            return

        url = database_url or get_settings().database_url
        self.engine = build_engine(url)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        db_logger.info("database_engine_created", dialect=self.engine.dialect.name)

    def create_all_tables(self) -> None:
        """Create missing tables. Migrations live in backend/alembic."""
        engine = self._require_engine()
        import core.models  # noqa: F401  # registers User and Domain on Base.metadata

        Base.metadata.create_all(bind=engine)

    def drop_all_tables(self) -> None:
        Base.metadata.drop_all(bind=self._require_engine())

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a session that commits on success and rolls back on error."""
        self._require_engine()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Run ``SELECT 1``.

        Returns:
            dict with 'healthy' (bool), 'latency_ms' (float) and 'error' (str or None)
        """
        if not self.is_initialized:
            return {"healthy": False, "latency_ms": 0, "error": "Database not initialized"}

        started = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            error = str(e)
            db_logger.warning("database_health_check_failed", error=error)

        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency_ms, "error": error}

    def reset(self) -> None:
        """Dispose of the engine so initialize() can run again."""
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.SessionLocal = None

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")
        return self.engine


db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "build_engine", "db", "enable_sqlite_foreign_keys", "get_db"]
