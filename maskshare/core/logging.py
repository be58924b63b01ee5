"""
Structured logging configuration using structlog.

JSON logs outside development, colored console output in development.
Every log line emitted while a request is in flight carries its request ID
(and the acting googleId when a handler binds one).
"""

import logging
import sys
import time
import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar
from typing import Any, cast

import structlog
from starlette.requests import Request
from starlette.responses import Response
from structlog.types import EventDict, Processor

from maskshare.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

# Context variables for request tracking
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
google_id_ctx: ContextVar[str | None] = ContextVar("google_id", default=None)


def add_context_info(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add request ID and acting user to log records."""
    request_id = request_id_ctx.get(None)
    if request_id:
        event_dict["request_id"] = request_id

    google_id = google_id_ctx.get(None)
    if google_id:
        event_dict["google_id"] = google_id

    return event_dict


# Loggers that drown out request logs at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "google.cloud", "google.auth", "urllib3")


def configure_logging(json_logs: bool | None = None, level: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render JSON lines. Defaults to True everywhere but development.
        level: Root log level name. Defaults to LOG_LEVEL.
    """
    if json_logs is None:
        json_logs = settings.ENVIRONMENT != "development"
    level_name = (level or settings.LOG_LEVEL).upper()

    renderer: list[Processor]
    if json_logs:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_context_info,
            structlog.processors.StackInfoRenderer(),
            *renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, level_name))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if json_logs:
        # The request middleware already logs enough per request
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.

    Example:
        logger = get_logger(__name__)
        logger.info("mask_created", mask_id=3, uploader="abc")
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def set_request_context(request_id: str, google_id: str | None = None) -> None:
    """Set context variables for the current request."""
    request_id_ctx.set(request_id)
    if google_id:
        google_id_ctx.set(google_id)


def bind_google_id(google_id: str) -> None:
    """Attach the acting user's googleId to the rest of this request's logs."""
    google_id_ctx.set(google_id)


def clear_request_context() -> None:
    """Clear context variables after request completes."""
    request_id_ctx.set(None)
    google_id_ctx.set(None)

async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    HTTP middleware that tags every request with an ID and logs its outcome.

    A client-supplied X-Request-ID is reused, otherwise a new one is generated.
    The ID is echoed back in the response headers.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    set_request_context(request_id)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        _request_logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
    finally:
        clear_request_context()
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


_request_logger = get_logger("maskshare.requests")
