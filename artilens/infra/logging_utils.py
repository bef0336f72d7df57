import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Union

LOGGER_NAME = "artilens"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
RESERVED_FIELDS = frozenset({"timestamp", "level", "message", "name", "exc_info"})


def resolve_level(level: Union[int, str]) -> int:
    """Map a level name (any case) or number to a ``logging`` level."""
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LEVEL_NAMES)}")
    return getattr(logging, name)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra_data`` fields never shadow the core fields."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, Mapping):
            for key, value in extra.items():
                field = str(key)
                if field in RESERVED_FIELDS:
                    field = f"extra_{field}"
                payload[field] = value
        return json.dumps(payload, default=str)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    return logger


LOGGER = configure_logging()
