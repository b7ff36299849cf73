"""API Routers package."""

from scholar_graph.routers import advanced as advanced_router
from scholar_graph.routers import health as health_router
from scholar_graph.routers import nodes as nodes_router
from scholar_graph.routers import queries as queries_router
from scholar_graph.routers import relations as relations_router
from scholar_graph.routers import reports as reports_router

__all__ = [
    "advanced_router",
    "health_router",
    "nodes_router",
    "queries_router",
    "relations_router",
    "reports_router",
]
