"""structlog setup for the arena server.

Two environment variables tune the output:

- LOG_FORMAT: "json" emits one JSON object per line, "console" (or unset)
  emits aligned key=value lines.
- LOG_LEVEL: one of DEBUG, INFO (default), WARNING, ERROR, CRITICAL.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

_VALID_LOG_FORMATS = {"json", "console", ""}
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# uvicorn logs one line per request and websockets logs every frame at DEBUG
_QUIET_LOGGERS = {"uvicorn.access": logging.WARNING, "websockets": logging.WARNING}


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Log teams, ability keys and winners by their wire value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def configure_structlog() -> None:
    """Install the structlog pipeline that hands events to stdlib logging.

    Rendering happens in the handlers' ProcessorFormatter, so the same events
    can go to stdout, a file, or pytest's caplog.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_enums,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def _is_test() -> bool:
    return "pytest" in sys.modules


def _resolve_json_mode() -> bool:
    value = os.environ.get("LOG_FORMAT", "").lower()
    if value not in _VALID_LOG_FORMATS:
        msg = f"Invalid LOG_FORMAT={value!r}. Must be 'json', 'console', or unset."
        raise ValueError(msg)
    return value == "json"


def _resolve_log_level() -> int:
    value = os.environ.get("LOG_LEVEL", "INFO").upper()
    if value not in _VALID_LOG_LEVELS:
        msg = f"Invalid LOG_LEVEL={value!r}. Must be one of {', '.join(sorted(_VALID_LOG_LEVELS))}."
        raise ValueError(msg)
    return getattr(logging, value)


def _handler_with_formatter(
    handler: logging.Handler,
    *,
    json_mode: bool,
    colors: bool = False,
) -> logging.Handler:
    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=colors)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        ),
    )
    return handler


def _open_log_file(log_dir: Path | str) -> Path:
    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path / f"{datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)}.log"


def setup_logging(
    log_dir: Path | str | None = None,
    level: int | None = None,
) -> Path | None:
    """Route arena logs to stdout and, optionally, to a file in log_dir.

    The file is named after the server start time and its path is returned.
    No file is written while running under pytest.
    """
    json_mode = _resolve_json_mode()
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_log_level() if level is None else level)
    root_logger.handlers.clear()
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    configure_structlog()
    root_logger.addHandler(
        _handler_with_formatter(logging.StreamHandler(sys.stdout), json_mode=json_mode, colors=sys.stdout.isatty()),
    )

    if log_dir is None or _is_test():
        return None

    file_path = _open_log_file(log_dir)
    root_logger.addHandler(_handler_with_formatter(logging.FileHandler(file_path), json_mode=json_mode))
    return file_path
