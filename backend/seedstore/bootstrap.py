from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .db import SchemaError, SeedWriteError, apply_schema, build_engine, create_store, session_scope, store_exists, store_path
from .schemas import BootstrapReport, InitResult, SeedResult

logger = logging.getLogger("seedstore.bootstrap")

SEED_INSERT = text("INSERT INTO settings (description) VALUES (:description)")


def initialize_store(database_url: str | None = None) -> InitResult:
    """Create the store and its schema when it does not exist yet.

    An existing store is left untouched, schema included. A DDL failure after
    the file was created is logged and reported as ``schema_failed``; the file
    itself is kept.
    """
    url = database_url or settings.database_url
    if store_exists(url):
        logger.info("Store already exists", extra={"event": "store_exists", "database_url": url})
        return InitResult(status="exists", database_url=url)

    create_store(url)
    try:
        apply_schema(url)
    except SchemaError as exc:
        logger.exception(
            "Schema application failed",
            extra={"event": "schema_failed", "database_url": url},
        )
        return InitResult(status="schema_failed", database_url=url, error=str(exc))

    logger.info("Schema applied", extra={"event": "schema_applied", "database_url": url})
    return InitResult(status="created", database_url=url)


def write_seed_row(database_url: str | None = None, description: str | None = None) -> SeedResult:
    url = database_url or settings.database_url
    if description is None:
        description = settings.seed_description
    # pysqlite creates missing files on connect; a stray empty file would pass as a store later.
    if not store_exists(url):
        raise SeedWriteError(f"Store does not exist: {store_path(url)}")

    engine = build_engine(url)
    try:
        with session_scope(engine) as session:
            result = session.execute(SEED_INSERT, {"description": description})
            seed = SeedResult(rows_affected=result.rowcount, last_insert_rowid=result.lastrowid)
    except SQLAlchemyError as exc:
        raise SeedWriteError(f"Seed insert failed for {url}: {exc}") from exc
    finally:
        engine.dispose()

    logger.info(
        "Seed row written",
        extra={
            "event": "seed_written",
            "database_url": url,
            "rows_affected": seed.rows_affected,
            "last_insert_rowid": seed.last_insert_rowid,
        },
    )
    return seed


_INIT_MESSAGES = {
    "created": "Database created successfully",
    "exists": "Database already exists",
}


def run_bootstrap(database_url: str | None = None) -> BootstrapReport:
    """Initialize the store, then append the seed row, printing progress to stdout."""
    url = database_url or settings.database_url

    init = initialize_store(url)
    if init.status == "schema_failed":
        print(f"Error: {init.error}")
    else:
        print(_INIT_MESSAGES[init.status])

    seed = write_seed_row(url)
    print(repr(seed))
    return BootstrapReport(init=init, seed=seed)
