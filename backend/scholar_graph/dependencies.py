"""
FastAPI Dependencies

Resolve the shared Neo4j client and build per-request services.
"""

from fastapi import Depends, Request

from scholar_graph.config import Settings, get_settings
from scholar_graph.services.graph import (
    AnalyticsService,
    Neo4jClient,
    NodeService,
    RelationshipService,
)


def get_neo4j_client(request: Request) -> Neo4jClient:
    """
    Return the client created in the application lifespan.

    Raises:
        RuntimeError: If the app was started without a client on app.state
    """
    client = getattr(request.app.state, "neo4j_client", None)
    if client is None:
        raise RuntimeError("Neo4j client is not initialized")
    return client


def get_node_service(client: Neo4jClient = Depends(get_neo4j_client)) -> NodeService:
    return NodeService(client)


def get_relationship_service(
    client: Neo4jClient = Depends(get_neo4j_client),
    settings: Settings = Depends(get_settings),
) -> RelationshipService:
    return RelationshipService(client, min_properties=settings.RELATION_MIN_PROPERTIES)


def get_analytics_service(
    client: Neo4jClient = Depends(get_neo4j_client),
) -> AnalyticsService:
    return AnalyticsService(client)
