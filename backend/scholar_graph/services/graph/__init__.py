"""
Graph Service Module

Neo4j-backed operations behind the HTTP routes:

- Node CRUD with label-scoped integer ids
- Relationship CRUD between label-qualified nodes
- Fixed analytical queries (recommendations, rankings, trends)

Usage:
    from scholar_graph.services.graph import Neo4jClient, NodeService

    client = Neo4jClient.from_settings(settings)
    await client.connect()

    nodes = NodeService(client)
    node = await nodes.create_node(["Usuario"], {"nombre": "Ana"})
"""

from scholar_graph.services.graph.analytics import AnalyticsService
from scholar_graph.services.graph.client import Neo4jClient
from scholar_graph.services.graph.nodes import NodeService
from scholar_graph.services.graph.relations import RelationshipRef, RelationshipService

__all__ = [
    "AnalyticsService",
    "Neo4jClient",
    "NodeService",
    "RelationshipRef",
    "RelationshipService",
]
