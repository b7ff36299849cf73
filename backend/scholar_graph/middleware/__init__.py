"""
Middleware Package

Provides FastAPI middleware for:
- Rate limiting
- Error handling

Rate limiting usage:
    from scholar_graph.middleware import limit_analytics

    @router.get("/influential-users")
    @limit_analytics
    async def influential_users(request: Request):
        ...
"""

from scholar_graph.middleware.error_handling import (
    BadRequestError,
    ErrorHandlingMiddleware,
    GraphQueryError,
    NotFoundError,
    ServiceError,
    handle_endpoint_errors,
    setup_error_handling,
)
from scholar_graph.middleware.rate_limit import (
    get_rate_limit,
    limit_analytics,
    limit_export,
    limit_graph_write,
    limiter,
    setup_rate_limiting,
)

__all__ = [
    "BadRequestError",
    "ErrorHandlingMiddleware",
    "GraphQueryError",
    "NotFoundError",
    "ServiceError",
    "handle_endpoint_errors",
    "setup_error_handling",
    "get_rate_limit",
    "limit_analytics",
    "limit_export",
    "limit_graph_write",
    "limiter",
    "setup_rate_limiting",
]
