"""Google Directions API client.

This module builds upstream directions URLs with the server-held
API key and fetches them over the application's pooled HTTP client.
"""

import json
import time
from typing import Any, Optional
from urllib.parse import quote

import backoff
import httpx

from core.base import BaseClient
from core.exceptions import DirectionsFetchError
from core.monitoring import track_external_service
from models.directions import RoutingRequest

SERVICE_NAME = "google_directions"

# Characters encodeURIComponent leaves alone besides alphanumerics and "_.-~"
_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a value for use inside a query string component.

    Args:
        value: Raw text, e.g. an address.

    Returns:
        str: Encoded text; spaces become ``%20``.
    """
    return quote(value, safe=_COMPONENT_SAFE)


def build_directions_url(
    base_url: str,
    origin: str,
    destination: str,
    mode: str,
    api_key: str,
) -> str:
    """Build the upstream directions URL.

    Origin and destination are percent-encoded; the key and mode are
    inserted verbatim.

    Args:
        base_url: Upstream directions endpoint.
        origin: Origin address or coordinates.
        destination: Destination address or coordinates.
        mode: Travel mode.
        api_key: Upstream credential.

    Returns:
        str: Full upstream URL.
    """
    return (
        f"{base_url}"
        f"?origin={encode_component(origin)}"
        f"&destination={encode_component(destination)}"
        f"&key={api_key}"
        f"&mode={mode}"
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_json(content: bytes) -> Any:
    """Decode a strict JSON document.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected, since they are
    not JSON and cannot be rendered back to the caller.

    Raises:
        ValueError: If the content is not a valid JSON document.
    """
    return json.loads(content, parse_constant=_reject_constant)


class DirectionsClient(BaseClient):
    """HTTP client for the Google Directions API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str,
        timeout: Optional[float] = None,
        max_retries: int = 0,
        retry_backoff: float = 0.5,
    ) -> None:
        """Initialize the directions client.

        Args:
            http_client: Pooled HTTP client owned by the application.
            api_key: Upstream credential, never returned to callers.
            base_url: Upstream directions endpoint.
            timeout: Request timeout in seconds, ``None`` for no timeout.
            max_retries: Extra attempts after a transport error.
            retry_backoff: Base backoff between attempts in seconds.
        """
        super().__init__(
            name="GoogleDirections",
            base_url=base_url,
            http_client=http_client,
            timeout=timeout,
        )
        self.api_key = api_key
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff

    def build_url(self, routing_request: RoutingRequest) -> str:
        """Build the upstream URL for a routing request."""
        return build_directions_url(
            self.base_url,
            routing_request.origin,
            routing_request.destination,
            routing_request.mode,
            self.api_key,
        )

    def _log_retry(self, details: dict) -> None:
        """Log a transport failure that is about to be retried."""
        exc = details.get("exception")
        self.logger.warning(
            "Directions request failed, retrying",
            error=type(exc).__name__ if exc else None,
            attempt=details["tries"],
            retry_in=f"{details['wait']:.3f}s",
        )

    async def _send(self, url: str) -> httpx.Response:
        """Send one upstream GET, recording its metrics."""
        start_time = time.time()
        try:
            response = await self.http_client.get(url, timeout=self.timeout)
        except Exception:
            track_external_service(SERVICE_NAME, 0, time.time() - start_time)
            raise

        duration = time.time() - start_time
        self._log_response("GET", url, response.status_code, duration)
        track_external_service(SERVICE_NAME, response.status_code, duration)
        return response

    async def get_directions(self, routing_request: RoutingRequest) -> Any:
        """Fetch directions and return the decoded upstream JSON.

        The payload is returned as-is, including provider-level error
        statuses inside the body and non-2xx responses with a JSON body.
        Transport errors are retried up to ``max_retries`` times with
        jittered exponential backoff; decoding errors never are.

        Args:
            routing_request: Validated routing request.

        Returns:
            Any: Decoded upstream JSON.

        Raises:
            DirectionsFetchError: On transport failure or undecodable body.
        """
        attempts = 0

        @backoff.on_exception(
            backoff.expo,
            httpx.TransportError,
            max_tries=self.max_retries + 1,
            jitter=backoff.full_jitter,
            on_backoff=self._log_retry,
            factor=self.retry_backoff,
        )
        async def send_with_retry(url: str) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            self._log_request("GET", url, attempts)
            return await self._send(url)

        try:
            response = await send_with_retry(self.build_url(routing_request))
        except Exception as e:
            self.logger.error(
                "Directions request failed",
                error=type(e).__name__,
                attempts=attempts,
            )
            raise DirectionsFetchError(e, attempts=max(attempts, 1), secret=self.api_key) from e

        try:
            data = decode_json(response.content)
        except ValueError as e:
            self.logger.error(
                "Directions response is not valid JSON",
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
            )
            raise DirectionsFetchError(
                e,
                attempts=attempts,
                status_code=response.status_code,
                secret=self.api_key,
            ) from e

        if isinstance(data, dict) and data.get("status") not in (None, "OK"):
            self.logger.info(
                "Upstream reported non-OK status",
                upstream_status=data.get("status"),
                status_code=response.status_code,
            )

        return data
