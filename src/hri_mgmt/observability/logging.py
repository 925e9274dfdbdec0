"""
hri_mgmt.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for JSON logs.
- Provide bound loggers, including per-request loggers tagged with the request id.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

REQUEST_ID_FIELD = "requestId"
FUNCTION_PREFIX_FIELD = "functionPrefix"


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def get_request_logger(name: str, *, request_id: str, prefix: str) -> structlog.stdlib.BoundLogger:
    # Every line carries the request id so failures correlate to the originating request.
    return get_logger(name).bind(**{REQUEST_ID_FIELD: request_id, FUNCTION_PREFIX_FIELD: prefix})


# --- Module Notes -----------------------------------------------------------
# The HTTP middleware also binds the request id into contextvars; callers outside
# a request (tests, scripts) rely on `get_request_logger` alone.
