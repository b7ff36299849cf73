"""
API-related enums.

Defines enums for rate limiting and other API concerns.
"""

from enum import Enum


class RateLimitType(str, Enum):
    """
    Rate limit categories for different endpoint types.

    Each category has a corresponding rate limit configured in settings.
    Usage:
        from scholar_graph.enums import RateLimitType
        from scholar_graph.config import settings

        limit = settings.get_rate_limit(RateLimitType.EXPORT)
    """

    # General API endpoints
    DEFAULT = "default"

    # Node and relationship mutations
    GRAPH_WRITE = "graph_write"

    # Fixed analytical queries
    ANALYTICS = "analytics"

    # CSV/PDF generation
    EXPORT = "export"
