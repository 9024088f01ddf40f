"""Error Handlers — every failure leaves the API in the LaunchpadError envelope.

Invariants:
    - LaunchpadError → its own status and to_response() body
    - RequestValidationError → 400 InvalidRequestError with one detail per field
    - Exception (catch-all) → 500 INTERNAL_ERROR, no exception text in the body
    - The envelope context carries the request route as the operation

Design Decisions:
    - Client-side errors (< 500) log at warning, server-side at error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from launchpad.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, InvalidRequestError, LaunchpadError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(LaunchpadError, launchpad_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _route(request: Request) -> str:
    return f"{request.method} {request.url.path}"


def _respond(request: Request, exc: LaunchpadError) -> JSONResponse:
    if exc.context.operation is None:
        exc.context.operation = _route(request)
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code} on {_route(request)}: {exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            "user_id": exc.context.user_id, "launch_id": exc.context.launch_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def launchpad_error_handler(request: Request, exc: LaunchpadError):
    return _respond(request, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return _respond(request, InvalidRequestError(details))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {_route(request)}: {exc}", exc_info=True)
    internal = LaunchpadError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, ErrorContext(operation=_route(request)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return JSONResponse(status_code=internal.http_status, content=internal.to_response())
