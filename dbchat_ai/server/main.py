"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.

Run it with ``uvicorn dbchat_ai.server.main:app``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dbchat_ai.ai import ProviderConfigValidator
from dbchat_ai.core.database.session import init_db
from dbchat_ai.core.logging_config import get_logger, setup_logging
from dbchat_ai.core.monitoring import initialize_logfire

from .api.v1 import ai, connections, database, enterprise, health, mcp, query_history
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the application store when it is SQLite and reports which AI
    services are configured.
    """
    try:
        logger.info("Starting up DBChat AI Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    ProviderConfigValidator.log_configuration_status(settings)

    yield

    logger.info("Shutting down DBChat AI Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    DBChat AI Server API

    Ask questions about a relational database in natural language: an AI model
    writes the SQL, the server runs it, and every query, session and
    configuration change is recorded for audit.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(database.router, prefix=f"{constant.API_PREFIX}/database")
app.include_router(ai.router, prefix=f"{constant.API_PREFIX}/ai")
app.include_router(connections.router, prefix=f"{constant.API_PREFIX}/connections")
app.include_router(query_history.router, prefix=f"{constant.API_PREFIX}/query-history")
app.include_router(enterprise.router, prefix=f"{constant.API_PREFIX}/enterprise")
app.include_router(mcp.router, prefix=f"{constant.API_PREFIX}/mcp")
