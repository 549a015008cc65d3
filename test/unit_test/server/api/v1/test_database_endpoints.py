"""Unit tests for the ad-hoc database connect endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestConnect:
    async def test_connect_discovers_schema(self, client: AsyncClient, target_db_url: str):
        payload = {"name": "target", "databaseType": "SQLITE", "connectionString": target_db_url}

        response = await client.post("/api/database/connect", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "target"
        assert data["databaseType"] == "SQLITE"
        assert data["isConnected"] is True
        assert data["errorMessage"] is None
        assert data["schema"]["schemaRaw"][1] == "users | id INTEGER, name VARCHAR(50)"
        assert data["schema"]["tables"] == [
            {"tableName": "orders", "columns": ["id", "user_id", "total"]},
            {"tableName": "users", "columns": ["id", "name"]},
        ]

    async def test_connect_failure_is_reported(self, client: AsyncClient):
        payload = {"name": "nowhere", "databaseType": "DB2", "connectionString": "Server=x"}

        response = await client.post("/api/database/connect", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["isConnected"] is False
        assert "Unsupported database type" in data["errorMessage"]
        assert data["schema"] is None

    async def test_connect_requires_fields(self, client: AsyncClient):
        response = await client.post("/api/database/connect", json={"name": "x"})
        assert response.status_code == 422
        assert "databaseType" in response.json()["errorMessage"]


async def test_supported_types(client: AsyncClient):
    response = await client.get("/api/database/supported-types")
    assert response.status_code == 200
    assert response.json() == ["MSSQL", "MYSQL", "POSTGRESQL", "ORACLE", "SQLITE"]
