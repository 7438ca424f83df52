from __future__ import annotations

import argparse
import logging
import sys

from .bootstrap import run_bootstrap
from .config import normalize_database_url, settings
from .db import StoreError
from .logging_utils import configure_logging

logger = logging.getLogger("seedstore.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create the settings store if missing, apply its schema, and append the seed row",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help=f"SQLAlchemy URL, sqlx-style sqlite://file.db, or a bare file path (default: {settings.database_url})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    database_url = normalize_database_url(args.database_url, fallback=settings.database_url)

    try:
        run_bootstrap(database_url)
    except StoreError as exc:
        logger.error("Bootstrap failed", extra={"event": "bootstrap_failed", "database_url": database_url})
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
