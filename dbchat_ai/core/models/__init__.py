"""Pydantic models shared between the API layer and the services."""
