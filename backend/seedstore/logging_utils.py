from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import sys
from typing import TextIO

from .config import settings

# Record attributes copied into the payload when a call passes them via ``extra``.
STORE_FIELDS = (
    "event",
    "database_url",
    "store_path",
    "status",
    "rows_affected",
    "last_insert_rowid",
)


class JsonFormatter(logging.Formatter):
    def __init__(self, env: str = settings.env) -> None:
        super().__init__()
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "env": self.env,
            "msg": record.getMessage(),
        }
        payload.update(
            {key: getattr(record, key) for key in STORE_FIELDS if getattr(record, key, None) is not None}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(stream: TextIO | None = None) -> None:
    """Attach a JSON handler to the root logger, once.

    Logs go to stderr by default; stdout carries the bootstrap status lines.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter())

    root.setLevel(getattr(logging, settings.log_level, logging.INFO))
    root.addHandler(handler)
