"""Directions router.

This module provides the FastAPI route that relays directions
requests to the upstream provider.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from core.config import Settings, get_settings
from core.exceptions import DirectionsFetchError, ValidationError
from core.monitoring import track_directions
from models.directions import DEFAULT_TRAVEL_MODE, RoutingRequest, TravelMode

from .client import DirectionsClient
from .dependencies import get_directions_client

router = APIRouter()
logger = structlog.get_logger(__name__)

MISSING_PARAMS_MESSAGE = "origin and destination are required"
UNSUPPORTED_MODE_MESSAGE = "unsupported travel mode"


@router.get("/directions", summary="Get directions between two places")
async def get_directions(
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    mode: str = DEFAULT_TRAVEL_MODE,
    settings: Settings = Depends(get_settings),
    client: DirectionsClient = Depends(get_directions_client),
) -> JSONResponse:
    """Relay a directions request to the upstream provider.

    The upstream JSON is returned unmodified with status 200, even when
    it carries a provider-level error status.

    Args:
        origin: Origin address or coordinates.
        destination: Destination address or coordinates.
        mode: Travel mode, ``driving`` when omitted.
        settings: Application settings.
        client: Upstream directions client.

    Returns:
        JSONResponse: Upstream payload.
    """
    if not origin or not destination:
        track_directions("invalid")
        raise ValidationError(MISSING_PARAMS_MESSAGE)

    if settings.strict_travel_modes and not TravelMode.is_known(mode):
        track_directions("invalid")
        raise ValidationError(UNSUPPORTED_MODE_MESSAGE, details={"reason": mode})

    routing_request = RoutingRequest(origin=origin, destination=destination, mode=mode)

    try:
        data = await client.get_directions(routing_request)
    except DirectionsFetchError:
        track_directions("upstream_error")
        raise

    response = JSONResponse(content=data)
    track_directions("success")
    logger.debug("Directions relayed", mode=mode)
    return response
