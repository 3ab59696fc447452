"""Structured logging on top of the stdlib logging tree.

Library modules get loggers from ``get_logger()``. Those loggers run a
short structlog chain and hand the event to stdlib logging as the record
message, with the key/value pairs as record extras. Importing
system_vitals therefore never touches the host process's handlers.

Entry points (the CLI) call ``configure_logging()`` once to attach
handlers that render those records as colored console lines or JSON.
Writing a rotating JSONL file is opt-in.
"""

import logging
import logging.handlers
import pathlib
import sys
from typing import Any

import structlog

# Rotating JSONL file: current.jsonl plus this many backups of _LOG_FILE_BYTES
_LOG_FILE_NAME = "current.jsonl"
_LOG_FILE_BYTES = 10 * 1024 * 1024
_LOG_FILE_BACKUPS = 3

_LIBRARY_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.render_to_log_kwargs,
]


def _add_component(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Set ``component`` to the last segment of the logger name.

    A ``component`` passed by the caller is kept.
    """
    if "component" not in event_dict:
        logger_name = event_dict.get("logger") or ""
        event_dict["component"] = logger_name.rsplit(".", 1)[-1] or "unknown"
    return event_dict


def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_component,
            structlog.processors.format_exc_info,
        ],
    )


def _file_handler(log_dir: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_dir / _LOG_FILE_NAME),
        maxBytes=_LOG_FILE_BYTES,
        backupCount=_LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
    return handler


def _console_handler(log_format: str) -> logging.StreamHandler[Any]:
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(renderer))
    return handler


def configure_logging(
    level: str = "INFO",
    log_format: str = "console",
    log_dir: pathlib.Path | None = None,
) -> None:
    """Install structured handlers on the root logger.

    Replaces any handlers already on the root logger, so only
    applications (not library code) should call this.

    Args:
        level: Minimum level for console output (DEBUG, INFO, ...).
        log_format: "console" for key=value lines, "json" for JSON lines.
        log_dir: If given, also write JSON lines to ``log_dir/current.jsonl``
            at INFO or below, rotated by size.
    """
    configured_level = logging.getLevelName(level.upper())
    if not isinstance(configured_level, int):
        configured_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = _console_handler(log_format)
    console_handler.setLevel(configured_level)
    root_logger.addHandler(console_handler)

    root_level = configured_level
    if log_dir is not None:
        file_handler = _file_handler(log_dir)
        file_handler.setLevel(min(logging.INFO, configured_level))
        root_logger.addHandler(file_handler)
        root_level = min(root_level, file_handler.level)

    root_logger.setLevel(root_level)


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger backed by the stdlib logger ``name``.

    Has no side effects: output goes wherever the host's logging
    configuration sends records for ``name``.

    Example:
        >>> from system_vitals.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("sampler_started", interval_seconds=1.0)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_LIBRARY_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
