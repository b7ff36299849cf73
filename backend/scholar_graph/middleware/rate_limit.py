"""
Rate Limiting Middleware

Prevents abuse and ensures fair resource usage using SlowAPI.

Usage:
    from scholar_graph.middleware.rate_limit import limit_graph_write

    @router.post("/{label}")
    @limit_graph_write
    async def create_node(request: Request, ...):
        ...

Rate limit configurations (from settings):
- DEFAULT: General API endpoints (100/minute)
- GRAPH_WRITE: Node and relationship mutations (60/minute)
- ANALYTICS: Fixed analytical queries (30/minute)
- EXPORT: CSV/PDF generation (10/minute)

Decorated endpoints must accept a `request: Request` parameter.
"""

import logging

from fastapi import FastAPI, Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from scholar_graph.config import settings
from scholar_graph.enums import RateLimitType

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """
    Get client identifier for rate limiting.

    Uses X-Forwarded-For header if behind a proxy,
    otherwise falls back to direct IP address.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address or identifier
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # First IP in the chain is the original client
        return forwarded_for.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[settings.get_rate_limit(RateLimitType.DEFAULT)],
)


def setup_rate_limiting(app: FastAPI, enabled: bool = True) -> None:
    """
    Configure rate limiting on the FastAPI app.

    Args:
        app: FastAPI application instance
        enabled: Whether to enable rate limiting
    """
    limiter.enabled = enabled
    app.state.limiter = limiter

    if not enabled:
        logger.info("Rate limiting disabled")
        return

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    logger.info("Rate limiting enabled")


def get_rate_limit(rate_limit_type: RateLimitType) -> str:
    """
    Get rate limit string for an endpoint type.

    Args:
        rate_limit_type: RateLimitType enum value

    Returns:
        Rate limit string (e.g., "100/minute")
    """
    return settings.get_rate_limit(rate_limit_type)


# Convenience decorators for common rate limits
def limit_graph_write(func):
    """Decorator for node/relationship mutation endpoints."""
    return limiter.limit(get_rate_limit(RateLimitType.GRAPH_WRITE))(func)


def limit_analytics(func):
    """Decorator for analytical query endpoints."""
    return limiter.limit(get_rate_limit(RateLimitType.ANALYTICS))(func)


def limit_export(func):
    """Decorator for CSV/PDF export endpoints."""
    return limiter.limit(get_rate_limit(RateLimitType.EXPORT))(func)
