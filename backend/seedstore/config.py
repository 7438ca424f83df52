from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./sqlite.db"
SEED_DESCRIPTION = "testing"


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def normalize_database_url(value: str | None, fallback: str = DEFAULT_DATABASE_URL) -> str:
    raw = (value or fallback).strip() or fallback
    # Some shells and .env files keep the quotes.
    if (raw.startswith('"') and raw.endswith('"')) or (raw.startswith("'") and raw.endswith("'")):
        raw = raw[1:-1].strip()

    if "://" not in raw:
        # Bare file path, e.g. "teststore" or "./data/store.db".
        return f"sqlite:///{raw}"

    scheme, suffix = raw.split("://", 1)
    scheme = scheme.lower()

    # sqlx-style "sqlite://file.db" names a relative file; SQLAlchemy wants three slashes.
    if scheme == "sqlite" and suffix and not suffix.startswith("/"):
        return f"sqlite:///{suffix}"

    return f"{scheme}://{suffix}"


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    seed_description: str
    echo_sql: bool
    log_level: str


settings = Settings(
    env=os.getenv("ENV", "development").strip().lower(),
    database_url=normalize_database_url(os.getenv("DATABASE_URL")),
    seed_description=SEED_DESCRIPTION,
    echo_sql=_as_bool(os.getenv("ECHO_SQL"), False),
    log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
)
