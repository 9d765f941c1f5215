"""
Logging setup for FruitLink.

``configure_logging(config)`` runs once per process, from whichever entry
point starts first: a CLI command, ``fruitlink serve`` (before uvicorn
starts) or the dashboard's cached config loader. Everything else only does
``logger = logging.getLogger(__name__)``.

Text lines (default)::

    2026-10-19T09:12:44Z [INFO] fruitlink.chat.router: intent=add_supplier resolved via=local

JSON lines (``json_format = true`` under ``[logging]``)::

    {"ts": "2026-10-19T09:12:44Z", "level": "INFO", "logger": "fruitlink.chat.router", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fruitlink.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Keys present on every LogRecord; anything else arrived via ``extra=``.
_RECORD_KEYS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "watchdog")
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonLinesFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields sit beside ``msg``."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_KEYS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonLinesFormatter()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def _build_handlers(config: "LoggingConfig") -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def configure_logging(config: "LoggingConfig") -> None:
    """Install stdout (and optional file) handlers on the root logger.

    Uvicorn's own handlers are removed so server lines share the same
    format, and chatty HTTP client loggers are held at WARNING.

    Args:
        config: The ``[logging]`` section of ``AppConfig``.
    """
    level = logging.getLevelName(config.level)
    formatter = build_formatter(config.json_format)

    handlers = _build_handlers(config)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
