"""Global exception handlers for FastAPI application.

Every error leaves the API as RFC 7807 problem details. Client errors are
logged at WARNING, server-side failures at ERROR.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from holdings_service.core.exceptions import AppException
from holdings_service.core.schemas import ProblemDetails

logger = logging.getLogger(__name__)


def _problem_response(
    status_code: int,
    *,
    detail: str,
    type_: str,
    title: str,
    instance: str,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    problem = ProblemDetails.from_parts(
        status=status_code,
        title=title,
        type=type_,
        detail=detail,
        instance=instance,
        extra=extra,
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(mode="json", exclude_none=True),
        media_type="application/problem+json",
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions.

    Args:
        request: The FastAPI request object.
        exc: The application exception that was raised.

    Returns:
        JSONResponse with RFC 7807 Problem Details format.
    """
    log_context = {
        "path": request.url.path,
        "method": request.method,
        "exception_type": exc.type,
        "status_code": exc.status_code,
        "detail": exc.detail,
    }
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Application exception occurred", extra=log_context)
    else:
        logger.warning("Application exception occurred", extra=log_context)

    return _problem_response(
        exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance or request.url.path,
        extra=exc.extra,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors (malformed query parameters)."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )
    return _problem_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(errors)} field(s)",
        type_="validation-error",
        title="Validation Error",
        instance=request.url.path,
        extra={"errors": errors},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Logs the full traceback and returns a generic 500 error to the client.
    """
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return _problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
        instance=request.url.path,
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the problem-details exception handlers on ``app``.

    Example:
        app = FastAPI()
        configure_exception_handlers(app)
    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)


__all__ = [
    "app_exception_handler",
    "configure_exception_handlers",
    "generic_exception_handler",
    "validation_exception_handler",
]
