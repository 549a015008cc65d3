"""
Monitoring and Tracing Configuration Module.

This module wires Pydantic Logfire into DBChat AI. When enabled it traces:
- pydantic-ai model requests made by the AI client façade
- SQLAlchemy statements against the application store
- outgoing HTTPX calls made by provider SDKs
- FastAPI endpoints

Logfire is off unless ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is set.
The ``log_*`` helpers are no-ops until ``initialize_logfire`` has succeeded, so
they can be called unconditionally from the request path.
"""

import os
from typing import Any, Dict, Optional

import logfire
from fastapi import FastAPI

from dbchat_ai.core.logging_config import get_logger

logger = get_logger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _env_flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "dbchat-ai")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "dbchat-ai-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

LOGFIRE_SAMPLE_RATE = float(os.getenv("LOGFIRE_SAMPLE_RATE", "1.0"))

LOGFIRE_TRACE_PYDANTIC_AI = _env_flag("LOGFIRE_TRACE_PYDANTIC_AI", "true")
LOGFIRE_TRACE_SQLALCHEMY = _env_flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _env_flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _env_flag("LOGFIRE_TRACE_FASTAPI", "true")

_logfire_active = False


def is_logfire_active() -> bool:
    """Return True once Logfire has been configured for this process."""
    return _logfire_active


def initialize_logfire(app: Optional[FastAPI] = None) -> bool:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Args:
        app: FastAPI application instance. When given, endpoints are traced too.

    Returns:
        True if Logfire was configured, False if it stays disabled.
    """
    global _logfire_active

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
            sampling=logfire.SamplingOptions(head=LOGFIRE_SAMPLE_RATE),
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    instrumentations = [
        (LOGFIRE_TRACE_PYDANTIC_AI, "Pydantic AI", lambda: logfire.instrument_pydantic_ai()),
        (LOGFIRE_TRACE_SQLALCHEMY, "SQLAlchemy", lambda: logfire.instrument_sqlalchemy()),
        (LOGFIRE_TRACE_HTTPX, "HTTPX", lambda: logfire.instrument_httpx()),
    ]
    if app is not None:
        instrumentations.append((LOGFIRE_TRACE_FASTAPI, "FastAPI", lambda: logfire.instrument_fastapi(app=app)))
    else:
        logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

    for enabled, name, instrument in instrumentations:
        if not enabled:
            continue
        try:
            instrument()
            logger.info(f"Logfire: {name} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {name}: {e}")

    _logfire_active = True
    logger.info(
        f"Logfire monitoring initialized: "
        f"project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, "
        f"service={LOGFIRE_SERVICE_NAME}"
    )
    return True


def _emit(level: str, message: str, attributes: Dict[str, Any]) -> None:
    if not _logfire_active:
        return
    try:
        getattr(logfire, level)(message, **attributes)
    except Exception:
        logger.debug(f"Could not send '{message}' to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    _emit(
        "info",
        "API request completed",
        {"method": method, "path": path, "status_code": status_code, "duration_ms": duration_ms},
    )


def log_ai_call(model: str, service: str, response_time_ms: int, token_count: int, success: bool) -> None:
    """
    Log one request made through the AI client façade.

    Args:
        model: Model name as requested by the caller
        service: AI service value (``openai``, ``awsbedrock`` ...)
        response_time_ms: Wall-clock duration of the call
        token_count: Estimated tokens of the response
        success: Whether the provider answered
    """
    _emit(
        "info" if success else "warn",
        "AI call completed" if success else "AI call failed",
        {
            "model": model,
            "service": service,
            "response_time_ms": response_time_ms,
            "token_count": token_count,
        },
    )


def log_query_execution(database_type: str, execution_time_ms: int, rows_returned: int, success: bool) -> None:
    """
    Log a SQL statement executed against a target database.

    Args:
        database_type: Target database type
        execution_time_ms: Duration of the statement
        rows_returned: Number of rows in the result
        success: Whether the statement succeeded
    """
    _emit(
        "info" if success else "warn",
        "Query executed" if success else "Query failed",
        {"database_type": database_type, "execution_time_ms": execution_time_ms, "rows_returned": rows_returned},
    )


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    _emit("error", f"{error_type}: {error_message}", dict(context or {}))
