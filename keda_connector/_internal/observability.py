"""Structured logging for connector processes.

The SDK only emits records through module loggers. A connector calls
`setup_logging()` once at startup to get one JSON object per line, with the
invocation context (`extra={"http_endpoint": ..., ...}`) lifted into
top-level keys.
"""

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import IO, Any

INVOCATION_FIELDS = ("error", "http_endpoint", "source", "attempt")
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Args:
        fields: Record attributes copied into the output when set.
    """

    def __init__(self, fields: Iterable[str] = INVOCATION_FIELDS) -> None:
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in self.fields
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: str | int = "INFO",
    fmt: str = "json",
    *,
    stream: IO[str] | None = None,
    fields: Iterable[str] = INVOCATION_FIELDS,
) -> logging.Handler:
    """Install a root handler for a connector process.

    Args:
        level: Level name ("debug", "INFO") or number. Unknown names mean INFO.
        fmt: "json" for JSONFormatter, anything else for plain text.
        stream: Output stream (default: stderr).
        fields: Extra record attributes surfaced by the JSON formatter.

    Returns:
        The installed handler, so callers can remove it again.
    """
    handler = logging.StreamHandler(stream)
    if fmt == "json":
        handler.setFormatter(JSONFormatter(fields))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    return handler
