"""Unit tests for the query history endpoint."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def connection_id(client: AsyncClient, target_db_url) -> str:
    response = await client.post(
        "/api/connections",
        json={"name": "target", "databaseType": "SQLITE", "connectionString": target_db_url},
    )
    return response.json()["id"]


async def run_query(client: AsyncClient, connection_id: str, **extra) -> dict:
    payload = {"prompt": "list users", "aiModel": "gpt-4o", "aiService": "OpenAI", **extra}
    response = await client.post(f"/api/connections/{connection_id}/query", json=payload)
    return response.json()


async def test_empty_history(client: AsyncClient):
    response = await client.get("/api/query-history")

    assert response.status_code == 200
    assert response.json() == {"data": [], "page": 1, "pageSize": 50, "totalCount": 0, "totalPages": 0}


async def test_history_lists_newest_first(client: AsyncClient, connection_id, model_script):
    await run_query(client, connection_id, userId="u-1", sessionId="s-1")
    model_script.reply = '{"summary": "bad", "query": "SELECT nope FROM missing_table"}'
    await run_query(client, connection_id, userId="u-2", prompt="broken")

    response = await client.get("/api/query-history")

    data = response.json()
    assert data["totalCount"] == 2
    assert [entry["userPrompt"] for entry in data["data"]] == ["broken", "list users"]
    first = data["data"][1]
    assert first["databaseConnectionId"] == connection_id
    assert first["isSuccessful"] is True
    assert first["rowsReturned"] == 3
    assert first["sessionId"] == "s-1"


async def test_history_filters(client: AsyncClient, connection_id, model_script):
    await run_query(client, connection_id, userId="u-1", sessionId="s-1")
    await run_query(client, connection_id, userId="u-2", sessionId="s-2")
    model_script.reply = "unparseable"
    await run_query(client, connection_id, userId="u-1", sessionId="s-1")

    by_user = (await client.get("/api/query-history", params={"userId": "u-1"})).json()
    assert by_user["totalCount"] == 2

    by_session = (await client.get("/api/query-history", params={"sessionId": "s-2"})).json()
    assert by_session["totalCount"] == 1

    failed = (await client.get("/api/query-history", params={"isSuccessful": "false"})).json()
    assert failed["totalCount"] == 1
    assert failed["data"][0]["isSuccessful"] is False

    by_connection = (await client.get("/api/query-history", params={"connectionId": connection_id})).json()
    assert by_connection["totalCount"] == 3


async def test_history_paging(client: AsyncClient, connection_id):
    for _ in range(3):
        await run_query(client, connection_id)

    response = await client.get("/api/query-history", params={"page": 2, "pageSize": 2})

    data = response.json()
    assert data["page"] == 2
    assert data["pageSize"] == 2
    assert data["totalCount"] == 3
    assert data["totalPages"] == 2
    assert len(data["data"]) == 1


@pytest.mark.parametrize("params", [{"page": 0}, {"pageSize": 0}, {"pageSize": 501}, {"connectionId": "nope"}])
async def test_history_rejects_bad_parameters(client: AsyncClient, params):
    response = await client.get("/api/query-history", params=params)
    assert response.status_code == 422
