"""Directions-related data models.

This module contains Pydantic models for inbound routing requests.
Upstream responses are opaque JSON and have no model.
"""

from enum import Enum

from pydantic import Field

from .common import BaseModel

DEFAULT_TRAVEL_MODE = "driving"


class TravelMode(str, Enum):
    """Travel modes documented by the Google Directions API."""

    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"

    @classmethod
    def is_known(cls, value: str) -> bool:
        """Check whether a raw mode string names a documented mode."""
        return value in cls._value2member_map_


class RoutingRequest(BaseModel):
    """A single inbound directions request.

    ``mode`` is kept as a raw string; an empty or unknown value is
    passed upstream untouched unless strict travel modes are enabled.
    """

    origin: str = Field(..., min_length=1, description="Origin address or coordinates")
    destination: str = Field(..., min_length=1, description="Destination address or coordinates")
    mode: str = Field(default=DEFAULT_TRAVEL_MODE, description="Upstream travel mode")
