"""
Routers mounted by ``dbchat_ai.server.main``.

- health: liveness and version
- database: ad-hoc connect and supported database types
- ai: query generation, chat and enterprise AI tools
- connections: stored connections, their schema and the query workflow
- query_history: executed query records
- enterprise: audit trail, metrics, system configuration, sessions and MCP queries
- mcp: MCP tools over HTTP
"""
