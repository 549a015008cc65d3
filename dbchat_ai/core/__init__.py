"""
Core utilities and configuration for DBChat AI.

This package provides core functionality including logging configuration,
database setup, and other shared utilities.
"""

from dbchat_ai.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
