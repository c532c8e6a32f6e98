"""Directions module.

This module relays directions requests to the Google Directions API,
injecting the server-held API key.
"""

from .client import DirectionsClient, build_directions_url, encode_component
from .dependencies import get_directions_client
from .router import router

__all__ = [
    "DirectionsClient",
    "build_directions_url",
    "encode_component",
    "get_directions_client",
    "router",
]
