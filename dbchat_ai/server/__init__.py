"""
DBChat AI Server Package.

This package contains the web server of DBChat AI.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Translation of exceptions into ``{"errorMessage": ...}`` responses.
    middleware: Request tracing and timing.
    services: Business logic sitting between the routers and the repositories.
"""
