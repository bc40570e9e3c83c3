"""
Logging for the gateway.

Repositories attach request context (resource, method, endpoint, status
code) through ``extra``. The JSON formatter lifts those keys into a nested
``request`` object so log shippers can index backend calls; the plain
formatter appends them to the line.
"""
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from pythonjsonlogger import jsonlogger

from core.config import settings


REQUEST_FIELDS = ("resource", "method", "endpoint", "status_code")


def _request_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in REQUEST_FIELDS
        if getattr(record, key, None) is not None
    }


class GatewayJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that groups backend request context."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = settings.app_env

        for key in REQUEST_FIELDS:
            log_record.pop(key, None)
        request = _request_context(record)
        if request:
            log_record['request'] = request


class GatewayTextFormatter(logging.Formatter):
    """Plain formatter that appends request context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request = _request_context(record)
        if request:
            line += " [" + " ".join(f"{k}={v}" for k, v in request.items()) + "]"
        return line


def setup_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """
    Install a single console handler on the root logger.

    Args:
        level: Root level name; defaults to settings.log_level
        json_output: Force JSON on or off; defaults to on outside development
        stream: Destination; defaults to stdout

    Returns:
        The installed handler
    """
    if json_output is None:
        json_output = not settings.is_development

    if json_output:
        formatter: logging.Formatter = GatewayJsonFormatter(
            fmt='%(asctime)s %(levelname)s %(name)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = GatewayTextFormatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # httpx logs every request at INFO; repositories already log failures
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if settings.debug:
        logging.getLogger("gateway").setLevel(logging.DEBUG)

    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (typically ``__name__``)."""
    return logging.getLogger(name)
