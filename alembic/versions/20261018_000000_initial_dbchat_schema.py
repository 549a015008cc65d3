"""Initial schema for DBChat AI

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

Creates the application store of DBChat AI:
- database_connections: registered target databases
- database_schemas / database_tables / database_columns: stored schema snapshots
- query_history: every query run through the query workflow
- user_sessions, system_configurations, audit_logs: enterprise features

Every table carries the audit columns (created/updated at and by) and the
``is_deleted`` soft delete flag.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import List, Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> List[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(100), nullable=True),
        sa.Column("updated_by", sa.String(100), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "database_connections",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("database_type", sa.String(50), nullable=False),
        sa.Column("connection_string", sa.Text(), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("environment", sa.String(100), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.Index("ix_database_connections_is_active", "is_active"),
    )

    op.create_table(
        "database_schemas",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("database_connection_id", sa.Uuid(), nullable=False),
        sa.Column("schema_raw", sa.Text(), nullable=False),
        sa.Column("last_refreshed", sa.DateTime(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["database_connection_id"], ["database_connections.id"], ondelete="CASCADE"),
        sa.Index("ix_database_schemas_database_connection_id", "database_connection_id"),
        sa.Index("ix_database_schemas_last_refreshed", "last_refreshed"),
    )

    op.create_table(
        "database_tables",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("database_schema_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("table_schema", sa.String(100), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["database_schema_id"], ["database_schemas.id"], ondelete="CASCADE"),
        sa.Index("ix_database_tables_schema_id_name", "database_schema_id", "name"),
    )

    op.create_table(
        "database_columns",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("database_table_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("data_type", sa.String(100), nullable=False),
        sa.Column("is_nullable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_primary_key", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_foreign_key", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("referenced_table", sa.String(100), nullable=True),
        sa.Column("referenced_column", sa.String(100), nullable=True),
        sa.Column("ordinal_position", sa.Integer(), nullable=False, server_default="0"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["database_table_id"], ["database_tables.id"], ondelete="CASCADE"),
        sa.Index("ix_database_columns_table_id_name", "database_table_id", "name"),
    )

    op.create_table(
        "query_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_prompt", sa.Text(), nullable=False),
        sa.Column("generated_sql", sa.Text(), nullable=False, server_default=""),
        sa.Column("ai_model", sa.String(50), nullable=False),
        sa.Column("ai_service", sa.String(50), nullable=False),
        sa.Column("execution_time_ms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_successful", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("error_message", sa.String(1000), nullable=True),
        sa.Column("rows_returned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("database_connection_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(100), nullable=True),
        sa.Column("session_id", sa.String(100), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["database_connection_id"], ["database_connections.id"], ondelete="CASCADE"),
        sa.Index("ix_query_history_is_successful", "is_successful"),
        sa.Index("ix_query_history_user_id", "user_id"),
        sa.Index("ix_query_history_session_id", "session_id"),
        sa.Index("ix_query_history_created_at", "created_at"),
    )

    op.create_table(
        "user_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.String(100), nullable=False),
        sa.Column("user_id", sa.String(100), nullable=True),
        sa.Column("user_name", sa.String(100), nullable=True),
        sa.Column("last_activity", sa.DateTime(), nullable=False),
        sa.Column("ip_address", sa.String(50), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_id"),
    )

    op.create_table(
        "system_configurations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("key", sa.String(100), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("is_encrypted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key"),
        sa.Index("ix_system_configurations_category", "category"),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("entity_name", sa.String(100), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("user_id", sa.String(100), nullable=True),
        sa.Column("user_name", sa.String(100), nullable=True),
        sa.Column("old_values", sa.Text(), nullable=True),
        sa.Column("new_values", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(50), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        sa.Column("additional_data", sa.String(1000), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_audit_logs_action", "action"),
        sa.Index("ix_audit_logs_entity_name", "entity_name"),
        sa.Index("ix_audit_logs_entity_id", "entity_id"),
        sa.Index("ix_audit_logs_user_id", "user_id"),
        sa.Index("ix_audit_logs_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("audit_logs")
    op.drop_table("system_configurations")
    op.drop_table("user_sessions")
    op.drop_table("query_history")
    op.drop_table("database_columns")
    op.drop_table("database_tables")
    op.drop_table("database_schemas")
    op.drop_table("database_connections")
