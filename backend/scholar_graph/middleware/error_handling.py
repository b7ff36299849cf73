"""
Error Handling Middleware

Provides consistent error responses across the API.

Features:
- Standardized error response format
- Correlation IDs for log tracking
- Custom exception classes for client, not-found and graph errors
- A route decorator that turns unexpected failures into GraphQueryError

Usage:
    from scholar_graph.middleware.error_handling import (
        NotFoundError,
        handle_endpoint_errors,
        setup_error_handling,
    )

    setup_error_handling(app, debug=settings.DEBUG)

    @router.get("/read/{label}/{node_id}")
    @handle_endpoint_errors("Read node")
    async def read_node(...):
        ...
        raise NotFoundError("Node not found")

Error taxonomy:
    - BadRequestError (400): missing properties, filters or labels; detected
      before any query runs
    - NotFoundError (404): zero matching rows where one or more were expected
    - GraphQueryError (500): anything raised while executing a query or
      rendering a response; the message is the underlying error text

Exception flow:
    Route → handle_endpoint_errors → ServiceError
                                          │
                                          └─ service_error_handler → JSON
    Anything escaping the above is caught by ErrorHandlingMiddleware.
"""

import functools
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, TypeVar
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


# =============================================================================
# Custom Exceptions
# =============================================================================


class ServiceError(Exception):
    """
    Base exception for service errors.

    Provides consistent error handling with:
    - HTTP status code
    - Error code for categorization
    - Optional details for debugging

    Example:
        raise ServiceError("Database connection failed", status_code=503)
    """

    status_code: int = 500
    error_code: str = "service_error"

    def __init__(
        self,
        message: str,
        status_code: int = None,
        error_code: str = None,
        details: dict = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code
        if error_code:
            self.error_code = error_code
        self.details = details


class BadRequestError(ServiceError):
    """
    Client input error.

    Raised when required properties, filters or labels are missing.
    """

    status_code = 400
    error_code = "bad_request"


class NotFoundError(ServiceError):
    """
    Resource not found error.

    Raised when a node or relationship lookup matches nothing.
    """

    status_code = 404
    error_code = "not_found"


class GraphQueryError(ServiceError):
    """
    Neo4j query error.

    Raised when graph database queries fail. Carries the driver's message.
    """

    status_code = 500
    error_code = "graph_error"


# =============================================================================
# Response Construction
# =============================================================================


def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 500,
    details: dict = None,
    error_id: str = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error_code: Error code for categorization
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional details
        error_id: Correlation id; generated when omitted

    Returns:
        JSONResponse with standardized error format
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_code,
            "message": message,
            "error_id": error_id or str(uuid4())[:8],
            "details": details,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError raised anywhere below the exception middleware."""
    error_id = str(uuid4())[:8]
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"[{error_id}] {exc.error_code}: {exc.message}",
        extra={
            "error_id": error_id,
            "error_code": exc.error_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return create_error_response(
        exc.error_code,
        exc.message,
        status_code=exc.status_code,
        details=exc.details,
        error_id=error_id,
    )


# =============================================================================
# Route Decorator
# =============================================================================


def handle_endpoint_errors(operation: str) -> Callable[[F], F]:
    """
    Wrap a route so unexpected failures become GraphQueryError.

    HTTPException and ServiceError pass through untouched. Any other
    exception (driver errors, rendering failures) is logged with the
    operation name and re-raised as a GraphQueryError carrying the raw
    error message.

    Args:
        operation: Human-readable operation name used in log lines

    Returns:
        Decorator preserving the wrapped function's signature
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except (HTTPException, ServiceError):
                raise
            except Exception as e:
                logger.error(f"{operation} failed: {type(e).__name__}: {e}")
                raise GraphQueryError(str(e)) from e

        return wrapper  # type: ignore[return-value]

    return decorator


# =============================================================================
# Error Handling Middleware
# =============================================================================


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    - Catches unhandled exceptions
    - Logs with correlation ID
    - Returns consistent error format
    - Hides internal details unless debug is on
    """

    def __init__(self, app, debug: bool = False):
        """
        Initialize middleware.

        Args:
            app: FastAPI/Starlette application
            debug: Whether to include stack traces in responses
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """Process request and handle any errors."""
        error_id = str(uuid4())[:8]

        try:
            return await call_next(request)

        except HTTPException:
            raise

        except ServiceError as e:
            return await service_error_handler(request, e)

        except Exception as e:
            logger.error(
                f"[{error_id}] Unhandled error: {type(e).__name__}: {e}",
                extra={
                    "error_id": error_id,
                    "path": request.url.path,
                    "method": request.method,
                    "traceback": traceback.format_exc(),
                },
            )

            details = None
            if self.debug:
                details = {
                    "exception": type(e).__name__,
                    "traceback": traceback.format_exc(),
                }

            return create_error_response(
                "internal_server_error",
                str(e),
                status_code=500,
                details=details,
                error_id=error_id,
            )


# =============================================================================
# Setup Function
# =============================================================================


def setup_error_handling(app: FastAPI, debug: bool = False) -> None:
    """
    Configure error handling on the FastAPI app.

    Args:
        app: FastAPI application instance
        debug: Whether to include stack traces in responses
    """
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_middleware(ErrorHandlingMiddleware, debug=debug)
    logger.info(f"Error handling middleware enabled (debug={debug})")
