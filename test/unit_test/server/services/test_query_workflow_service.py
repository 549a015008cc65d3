"""
Unit tests for QueryWorkflowService.

The SQL is written by a FunctionModel and executed against a SQLite target
database, so the whole workflow runs without external services.
"""

import json
import uuid
from datetime import timedelta

import pytest
from pydantic_ai.messages import SystemPromptPart

from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.database.entities import DatabaseConnection, QueryHistory
from dbchat_ai.server.services.query_workflow import ERROR_MESSAGE_LIMIT, QueryWorkflowService


@pytest.fixture
def workflow(repos, sql_generator, database_service) -> QueryWorkflowService:
    return QueryWorkflowService(repos, sql_generator, database_service)


@pytest.fixture
async def target_connection(repos, target_db_url) -> DatabaseConnection:
    return await repos.connections.create(
        DatabaseConnection(name="target", database_type="SQLITE", connection_string=target_db_url)
    )


class TestExecuteQuery:
    async def test_successful_query(self, workflow, target_connection, repos):
        result = await workflow.execute_query(
            target_connection.id, "list users", "gpt-4o", "OpenAI", session_id="s-1", user_id="u-1"
        )

        assert result.is_successful is True
        assert result.error_message is None
        assert result.generated_sql == "SELECT id, name FROM users ORDER BY id"
        assert result.results == [["id", "name"], ["1", "Ada"], ["2", "Grace"], ["3", "Linus"]]
        assert result.rows_returned == 3
        assert result.execution_time_ms >= 0

    async def test_successful_query_is_recorded(self, workflow, target_connection, repos):
        await workflow.execute_query(target_connection.id, "list users", "gpt-4o", "OpenAI", session_id="s-1", user_id="u-1")

        [history] = await repos.query_history.list_for_connection(target_connection.id)
        assert history.is_successful is True
        assert history.user_prompt == "list users"
        assert history.ai_model == "gpt-4o"
        assert history.ai_service == "OpenAI"
        assert history.rows_returned == 3
        assert history.session_id == "s-1"
        assert history.user_id == "u-1"

        page = await repos.audit_logs.search(action="QUERY_EXECUTED")
        assert page.total_count == 1
        assert page.items[0].entity_id == history.id
        assert json.loads(page.items[0].new_values)["rowsReturned"] == 3

    async def test_schema_reaches_the_model(self, workflow, target_connection, model_script):
        await workflow.execute_query(target_connection.id, "list users", "gpt-4o", "OpenAI")

        parts = [part for message in model_script.requests[0] for part in message.parts]
        system_prompt = next(part.content for part in parts if isinstance(part, SystemPromptPart))
        assert "users | id INTEGER, name VARCHAR(50)" in system_prompt
        assert "Database Type: SQLITE" in system_prompt

    async def test_statement_without_rows(self, workflow, target_connection, model_script):
        model_script.reply = '{"summary": "rename", "query": "UPDATE users SET name = \'Ada L.\' WHERE id = 1"}'

        result = await workflow.execute_query(target_connection.id, "rename Ada", "gpt-4o", "OpenAI")

        assert result.is_successful is True
        assert result.results == []
        assert result.rows_returned == 0

    async def test_failing_sql_is_recorded(self, workflow, target_connection, model_script, repos):
        model_script.reply = '{"summary": "oops", "query": "SELECT nope FROM missing_table"}'

        result = await workflow.execute_query(target_connection.id, "broken", "gpt-4o", "OpenAI", user_id="u-1")

        assert result.is_successful is False
        assert result.generated_sql == "SELECT nope FROM missing_table"
        assert "missing_table" in result.error_message
        assert result.results == []

        [history] = await repos.query_history.list_for_connection(target_connection.id)
        assert history.is_successful is False
        assert history.generated_sql == "SELECT nope FROM missing_table"
        assert history.rows_returned == 0
        assert len(history.error_message) <= ERROR_MESSAGE_LIMIT

        page = await repos.audit_logs.search(action="QUERY_FAILED")
        assert page.total_count == 1
        assert page.items[0].entity_id is None
        assert json.loads(page.items[0].new_values)["prompt"] == "broken"

    async def test_unparseable_model_answer(self, workflow, target_connection, model_script, repos):
        model_script.reply = "I would rather not."

        result = await workflow.execute_query(target_connection.id, "anything", "gpt-4o", "OpenAI")

        assert result.is_successful is False
        assert result.generated_sql == ""
        assert "Failed to parse AI response" in result.error_message
        [history] = await repos.query_history.list_for_connection(target_connection.id)
        assert history.generated_sql == ""

    async def test_unknown_connection(self, workflow, repos):
        missing_id = uuid.uuid4()

        result = await workflow.execute_query(missing_id, "list users", "gpt-4o", "OpenAI")

        assert result.is_successful is False
        assert result.error_message == f"No active database connection found with id {missing_id}"
        assert await repos.query_history.count() == 0

    async def test_inactive_connection(self, workflow, target_connection, repos):
        target_connection.is_active = False
        await repos.connections.update(target_connection)

        result = await workflow.execute_query(target_connection.id, "list users", "gpt-4o", "OpenAI")

        assert result.is_successful is False
        assert "No active database connection" in result.error_message
        assert await repos.query_history.count() == 0


def history_entry(connection_id, model="gpt-4o", service="OpenAI", ok=True, ms=100, age=timedelta(0)):
    created = utc_now() - age
    return QueryHistory(
        user_prompt="q",
        generated_sql="SELECT 1",
        ai_model=model,
        ai_service=service,
        execution_time_ms=ms,
        is_successful=ok,
        rows_returned=1,
        database_connection_id=connection_id,
        created_at=created,
        updated_at=created,
    )


async def store(session, *entries: QueryHistory) -> None:
    """Insert history rows keeping their timestamps."""
    session.add_all(entries)
    await session.commit()


class TestMetrics:
    async def test_empty_history(self, workflow):
        metrics = await workflow.get_metrics()
        assert metrics.total_queries == 0
        assert metrics.average_execution_time_ms == 0.0
        assert metrics.last_query_time is None
        assert await workflow.get_weekly_stats() == []

    async def test_metrics_over_window(self, workflow, target_connection, session):
        connection_id = target_connection.id
        await store(
            session,
            history_entry(connection_id, ms=100),
            history_entry(connection_id, ms=300, ok=False, model="gpt-4"),
            history_entry(connection_id, service="Ollama", model="llama2", ms=200),
            history_entry(connection_id, ms=5000, age=timedelta(days=45)),
        )

        metrics = await workflow.get_metrics(days=30)

        assert metrics.total_queries == 3
        assert metrics.successful_queries == 2
        assert metrics.failed_queries == 1
        assert metrics.average_execution_time_ms == 200.0
        assert metrics.queries_by_model == {"gpt-4o": 1, "gpt-4": 1, "llama2": 1}
        assert metrics.queries_by_service == {"OpenAI": 2, "Ollama": 1}
        assert metrics.last_query_time is not None

    async def test_weekly_stats_per_day(self, workflow, target_connection, session):
        connection_id = target_connection.id
        await store(
            session,
            history_entry(connection_id, age=timedelta(days=2)),
            history_entry(connection_id, ok=False, age=timedelta(days=2)),
            history_entry(connection_id),
            history_entry(connection_id, age=timedelta(days=10)),
        )

        stats = await workflow.get_weekly_stats()

        assert [day.count for day in stats] == [2, 1]
        assert [day.successful for day in stats] == [1, 1]
        assert stats[0].date < stats[1].date
