"""Pydantic models for the application.

This module contains all data models used throughout the application
for request/response validation and serialization.
"""

from .common import BaseModel, ErrorResponse, HealthResponse
from .directions import DEFAULT_TRAVEL_MODE, RoutingRequest, TravelMode

__all__ = [
    # Directions models
    "DEFAULT_TRAVEL_MODE",
    "RoutingRequest",
    "TravelMode",
    # Common models
    "BaseModel",
    "ErrorResponse",
    "HealthResponse",
]
