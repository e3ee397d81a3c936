"""
Exception Handlers for the FastAPI Application.

Domain errors raised by the services become JSON responses carrying their
status code. Database uniqueness violations become 409 responses. Anything
else is logged with an error id and answered with a 500.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from gunpla_sekai.core.errors import GunplaSekaiError, ValidationFailedError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.monitoring import log_error

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: GunplaSekaiError) -> JSONResponse:
    """Answer a domain error with its status code and ``{"detail": ...}``."""
    content = {"detail": exc.detail}
    if isinstance(exc, ValidationFailedError):
        content["errors"] = exc.errors

    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.detail}")
        log_error(type(exc).__name__, exc.detail, {"method": request.method, "path": request.url.path})
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=content)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Concurrent inserts that hit a unique constraint are reported as conflicts."""
    logger.warning(f"Integrity error in {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"detail": "Resource already exists"})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(GunplaSekaiError, domain_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
