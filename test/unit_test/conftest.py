"""
Fixtures shared by the unit tests.

AI models are pydantic-ai FunctionModels answering with scripted text, and
the target database is a SQLite file, so SQL is generated and executed
without external services.
"""

from dataclasses import dataclass, field
from typing import List

import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from sqlalchemy import create_engine, text

from dbchat_ai.ai import AIService, EnterpriseAIClient, SQLQueryGenerator
from dbchat_ai.datasource import DatabaseService
from dbchat_ai.server.core.config import Settings


@dataclass
class ModelScript:
    """What the fake model answers, and what it was asked."""

    reply: str = '{"summary": "All users", "query": "SELECT id, name FROM users ORDER BY id"}'
    replies: List[str] = field(default_factory=list)
    requests: List[List[ModelMessage]] = field(default_factory=list)

    def respond(self, messages: List[ModelMessage], info: AgentInfo) -> ModelResponse:
        self.requests.append(list(messages))
        content = self.replies.pop(0) if self.replies else self.reply
        return ModelResponse(parts=[TextPart(content=content)])


@pytest.fixture
def target_db_url(tmp_path) -> str:
    """SQLite target database with a users and an orders table."""
    url = f"sqlite:///{tmp_path / 'target.db'}"
    engine = create_engine(url)
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE users (id INTEGER PRIMARY KEY, name VARCHAR(50) NOT NULL)"))
        connection.execute(
            text("CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id), total REAL)")
        )
        connection.execute(text("INSERT INTO users (id, name) VALUES (1, 'Ada'), (2, 'Grace'), (3, 'Linus')"))
        connection.execute(text("INSERT INTO orders (id, user_id, total) VALUES (1, 1, 9.5)"))
    engine.dispose()
    return url


@pytest.fixture
def model_script() -> ModelScript:
    return ModelScript()


@pytest.fixture
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.delenv("OPENAI_KEY", raising=False)
    return Settings(_env_file=None, OPENAI_KEY="sk-test")


@pytest.fixture
def ai_client(test_settings, model_script) -> EnterpriseAIClient:
    client = EnterpriseAIClient(settings=test_settings)
    client.register_builder(AIService.OPENAI, lambda model, settings: FunctionModel(model_script.respond))
    return client


@pytest.fixture
def sql_generator(ai_client, test_settings) -> SQLQueryGenerator:
    return SQLQueryGenerator(ai_client, settings=test_settings)


@pytest.fixture
def database_service() -> DatabaseService:
    return DatabaseService()
