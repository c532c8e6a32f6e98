"""FastAPI application entry point.

This module sets up the FastAPI application with all necessary middleware,
routers, and configuration.
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
import structlog

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import get_settings
from core.exceptions import DirectionsFetchError, ValidationError
from core.logging import setup_logging
from core.middleware import LoggingMiddleware, RequestIDMiddleware
from core.monitoring import setup_monitoring
from directions.router import router as directions_router
from models.common import ErrorResponse, HealthResponse

# Initialize settings
settings = get_settings()

# Setup logging
setup_logging(settings)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the pooled upstream HTTP client on startup and closes it on
    shutdown.
    """
    setup_monitoring(settings.app_name, settings.app_version)

    async with httpx.AsyncClient(
        timeout=None,
        transport=app.state.upstream_transport,
    ) as http_client:
        app.state.http_client = http_client
        logger.info(
            "Directions proxy server running",
            url=f"http://{settings.host}:{settings.port}",
            version=settings.app_version,
        )

        yield

    logger.info("Shutting down directions proxy")


def create_app(upstream_transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        upstream_transport: Transport for the upstream HTTP client,
            the default network transport when omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Proxy for the Google Directions API that keeps the API key server-side",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )
    app.state.upstream_transport = upstream_transport

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=settings.cors_allow_methods_list,
        allow_headers=settings.cors_allow_headers_list,
    )

    # Add custom middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Add routers
    app.include_router(directions_router, tags=["directions"])

    # Add exception handlers
    add_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=settings.app_version)

    # Add metrics endpoint if enabled
    if settings.metrics_enabled:
        metrics_app = make_asgi_app()
        app.mount("/metrics", metrics_app)

    return app


def add_exception_handlers(app: FastAPI) -> None:
    """Add global exception handlers to the FastAPI app.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle rejected request parameters."""
        logger.warning(
            "Validation error",
            error=str(exc),
            path=request.url.path,
        )
        reason = exc.details.get("reason")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error=exc.message,
                details=str(reason) if reason is not None else None,
            ).to_content(),
        )

    @app.exception_handler(DirectionsFetchError)
    async def directions_fetch_error_handler(
        request: Request, exc: DirectionsFetchError
    ) -> JSONResponse:
        """Handle upstream failures."""
        details = exc.diagnostic
        logger.error(
            "External service error",
            error=str(exc),
            details=details,
            path=request.url.path,
            service=exc.service,
            upstream_status=exc.status_code,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=exc.message, details=details).to_content(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.exception(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal server error").to_content(),
        )


# Create the app instance
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=1 if settings.reload else settings.workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
