"""
Scholar Graph API

FastAPI application exposing CRUD and analytical queries over the academic
network stored in Neo4j.

Run with:
    scholar-graph
    # or
    uvicorn scholar_graph.main:app --host 0.0.0.0 --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scholar_graph.config import settings
from scholar_graph.logging_config import setup_logging
from scholar_graph.middleware import setup_error_handling, setup_rate_limiting
from scholar_graph.routers import (
    advanced_router,
    health_router,
    nodes_router,
    queries_router,
    relations_router,
    reports_router,
)
from scholar_graph.services.graph import Neo4jClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the shared Neo4j driver on startup and close it on shutdown."""
    client = Neo4jClient.from_settings(settings)
    await client.connect()
    app.state.neo4j_client = client
    logger.info(f"{settings.APP_NAME} started")

    try:
        yield
    finally:
        await client.close()
        logger.info(f"{settings.APP_NAME} stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="CRUD and analytical queries over an academic social network in Neo4j",
        version="1.0.0",
        docs_url="/api-docs",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_error_handling(app, debug=settings.DEBUG)
    setup_rate_limiting(app, enabled=settings.RATE_LIMIT_ENABLED)

    app.include_router(health_router.router)
    app.include_router(nodes_router.router)
    app.include_router(relations_router.router)
    app.include_router(queries_router.router)
    app.include_router(advanced_router.router)
    app.include_router(reports_router.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
