"""Directions dependencies for FastAPI."""

import httpx
from fastapi import Depends, Request

from core.config import Settings, get_settings

from .client import DirectionsClient


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Get the pooled HTTP client opened by the application lifespan."""
    return request.app.state.http_client


def get_directions_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> DirectionsClient:
    """Get a directions client bound to the current settings.

    Args:
        http_client: Pooled HTTP client.
        settings: Application settings.

    Returns:
        DirectionsClient: Client for the upstream directions API.
    """
    return DirectionsClient(
        http_client=http_client,
        api_key=settings.google_maps_api_key,
        base_url=settings.directions_api_url,
        timeout=settings.directions_timeout,
        max_retries=settings.directions_max_retries,
        retry_backoff=settings.directions_retry_backoff,
    )
