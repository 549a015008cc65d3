"""
Middleware modules for the DBChat AI server.

This package contains custom middleware for request timing and logging.
"""

from .logfire_middleware import SLOW_REQUEST_MS, LogfireMiddleware

__all__ = ["LogfireMiddleware", "SLOW_REQUEST_MS"]
