"""
Exception Handlers for the FastAPI Application.

Handled failures (``HTTPException`` and request validation errors) keep
their status code and answer ``{"errorMessage": ...}``. Anything else is
caught by the global handler, which logs detailed information including an
error ID and the request context, and answers 500.
"""

import traceback
import uuid
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.monitoring import log_error

logger = get_logger(__name__)


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Render validation errors as ``"<loc>: <msg>; ..."``, dropping the ``body`` prefix."""
    parts = []
    for error in errors:
        location = [str(item) for item in error.get("loc", ()) if item != "body"]
        message = error.get("msg", "Invalid value")
        parts.append(f"{'.'.join(location)}: {message}" if location else message)
    return "; ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Answer an HTTPException with its status code and detail."""
    logger.debug(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"errorMessage": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer an invalid request with 422 and a one-line summary of the problems."""
    message = format_validation_errors(exc.errors())
    logger.info(f"Invalid request to {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=422, content={"errorMessage": message})


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
    error_id = uuid.uuid4().hex
    error_type = type(exc).__name__

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": error_type,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(error_type, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "errorMessage": "Internal server error",
            "errorId": error_id,
            "errorType": error_type,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
