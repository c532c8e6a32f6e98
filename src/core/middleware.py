"""Custom middleware for the FastAPI application.

This module provides middleware for request ID tracking and
request/response logging.
"""

import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
import structlog

from .logging import bind_request_id, clear_context
from .monitoring import track_request

logger = structlog.get_logger(__name__)

UNMATCHED_ROUTE = "unmatched"


def route_label(request: Request) -> str:
    """Metrics label for a request: the matched route template, not the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to add a request ID to requests.

    The ID is taken from the incoming header when the caller supplies
    one, generated otherwise, and echoed back on the response.
    """

    def __init__(self, app, header_name: str = "X-Request-ID") -> None:
        """Initialize the middleware.

        Args:
            app: ASGI application.
            header_name: Header name for the request ID.
        """
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        bind_request_id(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers[self.header_name] = request_id
            return response
        finally:
            clear_context()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses.

    Query strings are not logged: callers' origins and destinations
    are location data.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            user_agent=request.headers.get("user-agent"),
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                process_time=f"{process_time:.4f}s",
                error=str(exc),
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time=f"{process_time:.4f}s",
        )
        track_request(request.method, route_label(request), response.status_code, process_time)

        response.headers["X-Process-Time"] = str(process_time)
        return response
