"""
Unit tests for the MCP endpoints.

``execute`` and ``generate-sql`` target the SQLite database named in the
body. ``schema`` and ``status`` use the configured toolset, which these tests
bind to the same file.
"""

import pytest
from httpx import AsyncClient

from dbchat_ai.mcp_server import MCPToolset
from dbchat_ai.server.main import app
from dbchat_ai.server.services.deps import get_mcp_toolset

pytestmark = pytest.mark.asyncio


@pytest.fixture
def mcp_payload(target_db_url):
    return {
        "prompt": "list users",
        "aiModel": "gpt-4o",
        "aiPlatform": "OpenAI",
        "databaseType": "SQLITE",
        "databaseConnectionString": target_db_url,
    }


@pytest.fixture
def configured_target(client, sql_generator, database_service, target_db_url):
    app.dependency_overrides[get_mcp_toolset] = lambda: MCPToolset(
        sql_generator, database_service, "SQLITE", target_db_url
    )


@pytest.fixture
def unconfigured_target(client, sql_generator, database_service):
    app.dependency_overrides[get_mcp_toolset] = lambda: MCPToolset(sql_generator, database_service)


class TestExecute:
    async def test_generates_and_runs_sql(self, client: AsyncClient, mcp_payload):
        response = await client.post("/api/mcp/execute", json=mcp_payload)

        assert response.status_code == 200
        assert response.json() == {
            "query": "SELECT id, name FROM users ORDER BY id",
            "results": [["id", "name"], ["1", "Ada"], ["2", "Grace"], ["3", "Linus"]],
            "isSuccessful": True,
            "errorMessage": None,
        }

    async def test_failure_is_reported_in_body(self, client: AsyncClient, mcp_payload, model_script):
        model_script.reply = '{"summary": "broken", "query": "SELECT nope FROM missing_table"}'

        response = await client.post("/api/mcp/execute", json=mcp_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["isSuccessful"] is False
        assert data["query"] == "SELECT nope FROM missing_table"
        assert "missing_table" in data["errorMessage"]

    @pytest.mark.parametrize(
        "field_name",
        ["databaseConnectionString", "databaseType", "aiModel", "aiPlatform", "prompt"],
    )
    async def test_required_fields(self, client: AsyncClient, mcp_payload, field_name):
        mcp_payload.pop(field_name)

        response = await client.post("/api/mcp/execute", json=mcp_payload)

        assert response.status_code == 400
        assert response.json() == {"errorMessage": f"{field_name} is required"}

    async def test_blank_field_is_missing(self, client: AsyncClient, mcp_payload):
        response = await client.post("/api/mcp/execute", json={**mcp_payload, "prompt": "  "})
        assert response.status_code == 400
        assert response.json()["errorMessage"] == "prompt is required"

    async def test_first_missing_field_is_reported(self, client: AsyncClient):
        response = await client.post("/api/mcp/execute", json={})
        assert response.json()["errorMessage"] == "databaseConnectionString is required"


class TestGenerateSql:
    async def test_generates_without_running(self, client: AsyncClient, mcp_payload):
        response = await client.post("/api/mcp/generate-sql", json=mcp_payload)

        assert response.status_code == 200
        assert response.json() == {
            "query": "SELECT id, name FROM users ORDER BY id",
            "isSuccessful": True,
            "errorMessage": None,
        }

    async def test_unparseable_answer(self, client: AsyncClient, mcp_payload, model_script):
        model_script.reply = "no idea"

        data = (await client.post("/api/mcp/generate-sql", json=mcp_payload)).json()

        assert data["isSuccessful"] is False
        assert data["query"] == ""
        assert "Failed to parse AI response" in data["errorMessage"]

    async def test_missing_model(self, client: AsyncClient, mcp_payload):
        mcp_payload.pop("aiModel")
        response = await client.post("/api/mcp/generate-sql", json=mcp_payload)
        assert response.status_code == 400


class TestSchemaAndStatus:
    async def test_schema(self, client: AsyncClient, configured_target):
        response = await client.get("/api/mcp/schema")

        assert response.status_code == 200
        data = response.json()
        assert data["isSuccessful"] is True
        assert "users | id INTEGER, name VARCHAR(50)" in data["schemaRaw"]

    async def test_schema_unconfigured(self, client: AsyncClient, unconfigured_target):
        data = (await client.get("/api/mcp/schema")).json()

        assert data == {
            "schemaRaw": [],
            "isSuccessful": False,
            "errorMessage": "MCP_DATABASE_CONNECTION_STRING is not set in the configuration.",
        }

    async def test_status(self, client: AsyncClient, configured_target):
        response = await client.get("/api/mcp/status")

        assert response.status_code == 200
        assert response.json() == {"isConnected": True, "errorMessage": None}

    async def test_status_unconfigured(self, client: AsyncClient, unconfigured_target):
        data = (await client.get("/api/mcp/status")).json()

        assert data["isConnected"] is False
        assert data["errorMessage"] == "MCP_DATABASE_CONNECTION_STRING is not set in the configuration."
