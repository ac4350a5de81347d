"""Structured logging setup.

Logs go to stdout, as JSON in deployed environments and as plain text
when ``log_json`` is off. Every record carries the id of the request
that produced it.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

from pythonjsonlogger.json import JsonFormatter

# Context variable for request ID
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get() or "-"
        return True


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter adding service metadata to every record."""

    def __init__(self, service_name: str, environment: str, **kwargs: Any) -> None:
        self.service_name = service_name
        self.environment = environment
        super().__init__(**kwargs)

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self.service_name
        log_record["environment"] = self.environment


def setup_logging(
    service_name: str = "pinboard",
    environment: str = "development",
    log_level: str = "INFO",
    json_output: bool = True,
) -> logging.Logger:
    """Configure the root logger.

    Args:
        service_name: Name reported in every JSON record.
        environment: Deployment environment.
        log_level: Logging level name.
        json_output: Whether to output JSON (True) or human-readable (False).

    Returns:
        Configured root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.addFilter(RequestIdFilter())

    formatter: logging.Formatter
    if json_output:
        formatter = ServiceJsonFormatter(
            service_name=service_name,
            environment=environment,
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s %(request_id)s",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").disabled = True

    return root_logger
