"""
Server-wide constants.

The REST surface is mounted under ``/api`` without a version segment so the
paths match what existing DBChat clients call (``/api/ai/query`` ...).
"""

PROJECT_NAME = "DBChat AI"
API_PREFIX = "/api"
API_VERSION = "1.0.0"
