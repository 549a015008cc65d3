"""
Exception handlers for the DBChat AI server.

This package contains the exception handlers that turn every failure into
the flat ``{"errorMessage": ...}`` body, and a setup function to register
them with the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
