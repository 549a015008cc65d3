"""Unit tests for the application store layer.

This package covers dbchat_ai/core/database:

- Entity model validation tests (SQLModel)
- Repository tests against in-memory SQLite
- Engine and session helpers

All tests use in-memory SQLite or mocks, no external database is needed.
"""
