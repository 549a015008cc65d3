"""DBChat AI.

This package turns natural-language questions into SQL against a connected
relational database, executes the generated SQL, and keeps an auditable record
of every query, session and configuration change.

High-level architecture
-----------------------

- ``dbchat_ai.ai``:

  - ``EnterpriseAIClient``, one façade over Azure OpenAI, OpenAI, Ollama,
    GitHub Models, AWS Bedrock, Anthropic, Google AI and Cohere, built on
    pydantic-ai models with a flat model cache and per-client metrics.
  - ``SQLQueryGenerator``, which prompts a model with the database schema and
    parses its JSON answer into a SQL query and summary.

- ``dbchat_ai.datasource``:

  - Connection-string resolution and schema discovery for the target
    databases (SQL Server, MySQL, PostgreSQL, Oracle, SQLite) and query
    execution over SQLAlchemy.

- ``dbchat_ai.core``:

  - Logging and monitoring configuration.
  - SQLModel entities and async repositories for the application store
    (connections, schema catalog, query history, sessions, configuration,
    audit logs).

- ``dbchat_ai.server``:

  - The FastAPI application exposing the ``/api`` endpoints.

- ``dbchat_ai.mcp_server``:

  - A FastMCP server publishing query, optimization, schema analysis, batch
    and query-pattern tools over stdio for one configured database.

Typical workflow
----------------

1. ``POST /api/database/connect`` to discover the schema of a database.
2. ``POST /api/ai/query`` to have a model write SQL for a prompt and run it.
3. Register the database with ``POST /api/connections`` and run queries through
   ``POST /api/connections/{id}/query`` to keep a query history and audit trail.
"""
