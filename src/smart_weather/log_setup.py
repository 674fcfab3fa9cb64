"""JSON console logging for the CLI."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import IO, Any

from .redaction import sanitize_for_logging, sanitize_text

# Optional `extra=` keys copied onto the JSON event when present.
CONTEXT_FIELDS = ("query", "lat", "lon", "seq", "persona", "category", "status_code")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per record, secrets redacted."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        context = {
            field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)
        }
        if context:
            event["context"] = sanitize_for_logging(context)
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(
    name: str = "smart_weather",
    level: int | str = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonConsoleFormatter())
        logger.addHandler(handler)
    return logger
