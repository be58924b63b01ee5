"""
Error responses and the per-route exception boundary.

Client errors (400/403/404/405) are answered in plain text so the reason can be
shown to the user directly. Server-side failures, and the 413 raised for
oversized uploads, use a JSON envelope:

    {"success": false, "error": "..."}

Unexpected exceptions never leave a route: ``BoundaryRoute`` logs them with the
traceback and answers with the generic 500 envelope.
"""

from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from maskshare.core.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
TOO_LARGE_MESSAGE = "File too large"

# Statuses answered with the JSON envelope rather than plain text
ENVELOPE_STATUSES = {status.HTTP_413_CONTENT_TOO_LARGE}


def error_envelope(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error envelope."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Turn the first validation error into a one-line, client-facing reason.

    Missing fields and empty strings/lists both read as
    "Missing required field: <name>".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "json_invalid":
        return "Invalid JSON body"
    if not field:
        return "Missing request body" if error_type == "missing" else "Invalid request body"
    if error_type == "missing":
        return f"Missing required field: {field}"
    if error_type in ("string_too_short", "too_short") and ctx.get("min_length") == 1:
        return f"Missing required field: {field}"
    return f"Invalid {field}: {error.get('msg', 'invalid value')}"


async def validation_exception_handler(request: Request, exc: Exception) -> Response:
    """Request validation failures are 400s with a plain-text reason."""
    assert isinstance(exc, RequestValidationError)
    reason = describe_validation_error(exc)
    logger.info("request_validation_failed", path=request.url.path, reason=reason)
    return PlainTextResponse(reason, status_code=status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Answer HTTPExceptions in plain text, or with the envelope for 413/5xx."""
    assert isinstance(exc, StarletteHTTPException)
    headers = getattr(exc, "headers", None)
    if exc.status_code in ENVELOPE_STATUSES or exc.status_code >= 500:
        response: Response = error_envelope(exc.status_code, str(exc.detail))
    else:
        response = PlainTextResponse(str(exc.detail), status_code=exc.status_code)
    if headers:
        response.headers.update(headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Install the plain-text / envelope handlers on ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class BoundaryRoute(APIRoute):
    """
    Route class that converts unexpected exceptions into the 500 envelope.

    HTTPException and RequestValidationError pass through untouched to the
    handlers registered above.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def boundary_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except (HTTPException, StarletteHTTPException, RequestValidationError):
                raise
            except Exception as e:
                logger.error(
                    "request_failed",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                return error_envelope(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
                )

        return boundary_route_handler
