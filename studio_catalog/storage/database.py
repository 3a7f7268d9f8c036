"""Engine and session management for the catalog store."""

import logging
from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studio_catalog.config import Settings, get_settings
from studio_catalog.models.base import Base

logger = logging.getLogger(__name__)


def _is_memory_sqlite(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def _engine_options(url: URL, settings: Settings, pool_size: int, max_overflow: int) -> dict[str, Any]:
    """
    Build ``create_engine`` keyword arguments for a catalog URL.

    In-memory SQLite gets a single shared connection; every other store
    gets a sized connection pool.
    """
    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.sql_echo,
    }
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            options["poolclass"] = StaticPool
            return options

    options.update(
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=settings.db_pool_timeout,
    )
    return options


def _enforce_sqlite_foreign_keys(engine) -> None:
    # SQLite ignores REFERENCES clauses unless asked on every connection
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """Owns the engine and hands out sessions for catalog transactions.

    Sessions keep loaded nodes usable after commit (``expire_on_commit=False``)
    and never autoflush; the position reconciler flushes explicitly between
    its steps.
    """

    def __init__(
        self,
        database_url: str | None = None,
        pool_size: int | None = None,
        max_overflow: int | None = None,
    ):
        """
        Initialize database connection.

        Args:
            database_url: SQLAlchemy URL. If None, reads from settings.
            pool_size: Pooled connections. If None, uses settings.
            max_overflow: Extra connections beyond pool_size. If None, uses settings.
        """
        settings = get_settings()
        url = make_url(database_url or settings.database_url)

        self.url = url
        self.engine = create_engine(
            url,
            **_engine_options(
                url,
                settings,
                pool_size if pool_size is not None else settings.db_pool_size,
                max_overflow if max_overflow is not None else settings.db_max_overflow,
            ),
        )
        if url.get_backend_name() == "sqlite":
            _enforce_sqlite_foreign_keys(self.engine)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        logger.debug(
            "Database engine created",
            extra={"backend": url.get_backend_name(), "database": url.database},
        )

    def create_tables(self) -> None:
        """Create all catalog tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all catalog tables."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Session scope: commits what is left pending on exit, rolls back on error.

        Usage:
            with db.session() as session:
                CatalogService(session).move_node(payload)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global database instance
_db: Database | None = None


def get_db(database_url: str | None = None) -> Database:
    """
    Get or create the global database instance.

    Args:
        database_url: Database connection URL. Only used on first call.

    Returns:
        Database instance
    """
    global _db
    if _db is None:
        _db = Database(database_url)
    return _db


def reset_db() -> None:
    """Dispose and forget the global database instance (used by tests)."""
    global _db
    if _db is not None:
        _db.dispose()
    _db = None
