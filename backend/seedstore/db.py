from __future__ import annotations

from contextlib import contextmanager
import logging
from pathlib import Path
import sqlite3
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.schema import CreateTable

from .config import settings
from .models import SCHEMA_TABLES

logger = logging.getLogger("seedstore.db")


class StoreError(RuntimeError):
    """Base class for store bootstrap failures."""


class UnsupportedStoreError(StoreError, ValueError):
    """The URL does not name a file-backed SQLite store."""


class StoreProbeError(StoreError):
    """Whether the store exists could not be determined."""


class SchemaError(StoreError):
    """Schema DDL failed on a freshly created store."""


class SeedWriteError(StoreError):
    """Connecting to the store or inserting the seed row failed."""


def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, *, enforce_foreign_keys: bool = False) -> Engine:
    engine = create_engine(
        database_url,
        echo=settings.echo_sql,
        future=True,
    )
    if enforce_foreign_keys:
        event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def store_path(database_url: str) -> Path:
    """Return the file backing *database_url*.

    Only file-backed SQLite URLs are accepted; in-memory databases and other
    backends raise :class:`UnsupportedStoreError`.
    """
    try:
        url = make_url(database_url)
    except ArgumentError as exc:
        raise UnsupportedStoreError(f"Invalid database URL: {database_url!r}") from exc

    if url.get_backend_name() != "sqlite":
        raise UnsupportedStoreError(f"Only SQLite stores are supported, got {url.get_backend_name()!r}")

    database = url.database or ""
    if not database or database == ":memory:" or database.startswith("file:"):
        raise UnsupportedStoreError(f"Store is not file-backed: {database_url!r}")

    return Path(database)


def store_exists(database_url: str) -> bool:
    path = store_path(database_url)
    try:
        path.stat()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise StoreProbeError(f"Cannot determine whether {path} exists: {exc}") from exc
    return True


def create_store(database_url: str) -> Path:
    """Create the empty database file, including missing parent directories."""
    path = store_path(database_url)
    engine = build_engine(database_url)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with engine.connect():
            pass
    except (OSError, SQLAlchemyError) as exc:
        raise StoreError(f"Cannot create store at {path}: {exc}") from exc
    finally:
        engine.dispose()

    logger.info(
        "Store created",
        extra={"event": "store_created", "store_path": str(path)},
    )
    return path


def apply_schema(database_url: str) -> None:
    engine = build_engine(database_url, enforce_foreign_keys=True)
    try:
        with engine.begin() as connection:
            for table in SCHEMA_TABLES:
                connection.execute(CreateTable(table, if_not_exists=True))
    except SQLAlchemyError as exc:
        raise SchemaError(str(exc)) from exc
    finally:
        engine.dispose()
