"""
Logging configuration with optional JSON output.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from ulidkit.config import settings


class JSONFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "service": "ulidkit",
        }

        # Add extra fields if present
        if hasattr(record, "generator"):
            log_obj["generator"] = record.generator
        if hasattr(record, "kind"):
            log_obj["kind"] = record.kind
        if hasattr(record, "lock_mode"):
            log_obj["lock_mode"] = record.lock_mode

        # Add exception info if present
        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def configure_logging(level: Optional[int] = None) -> logging.Handler:
    """
    Configure logging with optional JSON format.
    Set ULIDKIT_LOG_JSON=true in env to enable JSON logging;
    ULIDKIT_LOG_LEVEL picks the level when none is passed.
    """
    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)

    if settings.LOG_JSON:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logging.basicConfig(
        level=level,
        handlers=[handler],
    )
    return handler
