"""Monitoring and metrics collection.

This module provides Prometheus metrics collection and monitoring
functionality for the application.
"""

from prometheus_client import Counter, Histogram, Info
import structlog

logger = structlog.get_logger(__name__)

# Prometheus metrics
request_count = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"]
)

request_duration = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"]
)

directions_requests = Counter(
    "directions_requests_total",
    "Total number of directions requests by outcome",
    ["outcome"]
)

external_service_requests = Counter(
    "external_service_requests_total",
    "Total requests to external services",
    ["service", "status_code"]
)

external_service_duration = Histogram(
    "external_service_request_duration_seconds",
    "External service request duration in seconds",
    ["service"]
)

# Application info
app_info = Info(
    "app_info",
    "Application information"
)


def setup_monitoring(name: str, version: str) -> None:
    """Setup monitoring and metrics collection.

    Args:
        name: Application name.
        version: Application version.
    """
    logger.info("Setting up monitoring")

    app_info.info({
        "version": version,
        "name": name,
    })


def track_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    """Track HTTP request metrics.

    Args:
        method: HTTP method.
        endpoint: Request endpoint.
        status_code: Response status code.
        duration: Request duration in seconds.
    """
    request_count.labels(
        method=method,
        endpoint=endpoint,
        status_code=status_code
    ).inc()

    request_duration.labels(
        method=method,
        endpoint=endpoint
    ).observe(duration)


def track_directions(outcome: str) -> None:
    """Track the outcome of a directions request.

    Args:
        outcome: One of ``success``, ``invalid`` or ``upstream_error``.
    """
    directions_requests.labels(outcome=outcome).inc()


def track_external_service(service: str, status_code: int, duration: float) -> None:
    """Track external service request metrics.

    Args:
        service: Service name.
        status_code: HTTP status code, 0 when no response arrived.
        duration: Request duration in seconds.
    """
    external_service_requests.labels(
        service=service,
        status_code=status_code
    ).inc()

    external_service_duration.labels(service=service).observe(duration)
