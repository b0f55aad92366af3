"""Schema Materializer API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map MaterializerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Schema materialized once on startup; a broken schema aborts startup
    - The shared HTTP client is closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Executor kept on app.state: routes reach it through an overridable dependency
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from materializer.api.error_handlers import register_error_handlers
from materializer.api.routes import graphql, health
from materializer.config import get_settings
from materializer.infrastructure.http_client import HttpJsonClient
from materializer.infrastructure.observability import setup_logging
from materializer.infrastructure.schema_source import load_schema_source
from materializer.services.query_executor import QueryExecutor
from materializer.services.schema_builder import build_materialized_schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    http_client = HttpJsonClient(timeout_seconds=settings.http_timeout_seconds)
    try:
        source = load_schema_source(settings.schema_path)
        app.state.executor = QueryExecutor(
            build_materialized_schema(source, http_client),
        )
        logger.info("Schema Materializer API started")
        yield
    finally:
        app.state.executor = None
        await http_client.aclose()
        logger.info("Schema Materializer API shutting down")


app = FastAPI(
    title="Schema Materializer API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(graphql.router)

register_error_handlers(app)
