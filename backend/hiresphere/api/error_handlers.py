"""Error Handlers — map exceptions escaping a route to the HireSphere error envelope.

Invariants:
    - HireSphereError → its own http_status and to_response() body
    - RequestValidationError → 400 with the same envelope as InputValidationError,
      so a bad body and a bad store input look identical to the client
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three layers: domain (HireSphereError), request validation, catch-all
    - Expected outcomes (severity info/warning) logged at WARNING, the rest at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hiresphere.core.errors import (
    ErrorContext, ErrorSeverity, HireSphereError, InputValidationError,
)

logger = logging.getLogger(__name__)

_QUIET = (ErrorSeverity.INFO, ErrorSeverity.WARNING)

INTERNAL_ERROR_BODY = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": "internal",
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HireSphereError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unhandled_error)


def _error_response(request: Request, exc: HireSphereError) -> JSONResponse:
    level = logging.WARNING if exc.severity in _QUIET else logging.ERROR
    logger.log(
        level, f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "account_id": exc.context.account_id},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _domain_error(request: Request, exc: HireSphereError) -> JSONResponse:
    return _error_response(request, exc)


async def _request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Reshape FastAPI's 422 into the 400 envelope stores use."""
    error = InputValidationError(
        "Invalid request data",
        errors=[
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
        context=ErrorContext(operation=request.url.path),
    )
    return _error_response(request, error)


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}", exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )
