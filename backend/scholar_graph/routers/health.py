"""
Health Check Endpoints

Provides health check endpoints for monitoring and orchestration.

Endpoints:
- GET /api/health - Basic health check
- GET /api/health/ready - Readiness probe (Neo4j reachable)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from scholar_graph.config import settings
from scholar_graph.dependencies import get_neo4j_client
from scholar_graph.services.graph import Neo4jClient

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """
    Basic health check.

    Returns a simple status response indicating the API is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
    }


@router.get("/ready")
async def readiness_check(client: Neo4jClient = Depends(get_neo4j_client)):
    """
    Readiness probe.

    Returns 503 until Neo4j answers a trivial query.
    """
    if await client.verify_connectivity():
        return {"status": "ready", "dependencies": {"neo4j": "healthy"}}

    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "dependencies": {"neo4j": "unhealthy"}},
    )
