"""Base classes and utilities.

This module provides base classes shared by the application's
outbound HTTP clients.
"""

from abc import ABC
from typing import Optional

import httpx
import structlog

from .logging import redact_url


class BaseClient(ABC):
    """Base HTTP client class.

    Wraps a shared ``httpx.AsyncClient`` and provides request/response
    logging with credentials redacted.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        http_client: httpx.AsyncClient,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the client.

        Args:
            name: Client name for logging.
            base_url: Base URL for the service.
            http_client: Pooled HTTP client owned by the application.
            timeout: Request timeout in seconds, ``None`` to wait indefinitely.
        """
        self.name = name
        self.base_url = base_url
        self.http_client = http_client
        self.timeout = timeout
        self.logger = structlog.get_logger(f"{name}Client")

    def _log_request(self, method: str, url: str, attempt: int = 1) -> None:
        """Log outgoing request.

        Args:
            method: HTTP method.
            url: Request URL.
            attempt: 1-based attempt number.
        """
        self.logger.info(
            "Outgoing request",
            method=method,
            url=redact_url(url),
            timeout=self.timeout,
            attempt=attempt,
        )

    def _log_response(self, method: str, url: str, status_code: int, duration: float) -> None:
        """Log response.

        Args:
            method: HTTP method.
            url: Request URL.
            status_code: Response status code.
            duration: Request duration in seconds.
        """
        self.logger.info(
            "Response received",
            method=method,
            url=redact_url(url),
            status_code=status_code,
            duration=f"{duration:.4f}s",
        )
