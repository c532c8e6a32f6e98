import asyncio

import httpx
import pytest

from core.exceptions import DirectionsFetchError
from core.logging import redact_url
from directions.client import DirectionsClient, build_directions_url, decode_json, encode_component
from models.directions import RoutingRequest, TravelMode

BASE_URL = "https://maps.googleapis.com/maps/api/directions/json"


@pytest.mark.parametrize("raw, encoded", [
    ("New York", "New%20York"),
    ("a&b", "a%26b"),
    ("#1, Main", "%231%2C%20Main"),
    ("x+y=z", "x%2By%3Dz"),
    ("Zürich", "Z%C3%BCrich"),
    ("-_.!~*'()", "-_.!~*'()"),
])
def test_encode_component(raw, encoded):
    assert encode_component(raw) == encoded


def test_build_directions_url():
    url = build_directions_url(BASE_URL, "New York", "Boston, MA", "transit", "k123")

    assert url == (
        BASE_URL
        + "?origin=New%20York&destination=Boston%2C%20MA&key=k123&mode=transit"
    )


def test_build_directions_url_inserts_mode_verbatim():
    url = build_directions_url(BASE_URL, "A", "B", "walking|x", "k")

    assert url.endswith("&mode=walking|x")


@pytest.mark.parametrize("body", [b"NaN", b'{"distance": Infinity}', b"[-Infinity]"])
def test_decode_json_rejects_non_standard_constants(body):
    with pytest.raises(ValueError):
        decode_json(body)


def test_decode_json_accepts_plain_json():
    assert decode_json(b'{"status": "OK", "routes": [1.5]}') == {"status": "OK", "routes": [1.5]}


def test_get_directions_reports_attempts_after_exhausting_retries():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = DirectionsClient(
                http_client=http_client,
                api_key="k",
                base_url=BASE_URL,
                max_retries=2,
                retry_backoff=0,
            )
            await client.get_directions(RoutingRequest(origin="A", destination="B"))

    with pytest.raises(DirectionsFetchError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.attempts == 3
    assert isinstance(exc_info.value.cause, httpx.ConnectError)


def test_get_directions_rejects_nan_body():
    def handler(request):
        return httpx.Response(200, content=b'{"status": "OK", "distance": NaN}')

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = DirectionsClient(http_client=http_client, api_key="k", base_url=BASE_URL)
            await client.get_directions(RoutingRequest(origin="A", destination="B"))

    with pytest.raises(DirectionsFetchError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.status_code == 200
    assert "NaN" in exc_info.value.diagnostic


def test_get_directions_returns_decoded_payload():
    payload = {"status": "ZERO_RESULTS", "routes": []}
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=payload)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = DirectionsClient(http_client=http_client, api_key="k", base_url=BASE_URL)
            return await client.get_directions(RoutingRequest(origin="A", destination="B"))

    assert asyncio.run(run()) == payload
    assert seen[0].url.params["mode"] == "driving"


def test_get_directions_wraps_transport_errors():
    def handler(request):
        raise httpx.ReadTimeout("", request=request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = DirectionsClient(http_client=http_client, api_key="k", base_url=BASE_URL)
            await client.get_directions(RoutingRequest(origin="A", destination="B"))

    with pytest.raises(DirectionsFetchError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.attempts == 1
    assert exc_info.value.diagnostic == "ReadTimeout"
    assert isinstance(exc_info.value.cause, httpx.ReadTimeout)


def test_fetch_error_diagnostic_scrubs_secret():
    error = DirectionsFetchError(ValueError("bad url ...&key=s3cret&mode=x"), secret="s3cret")

    assert error.message == "Failed to fetch directions"
    assert "s3cret" not in error.diagnostic
    assert error.diagnostic.startswith("ValueError: ")


def test_redact_url_masks_key_only():
    redacted = redact_url(BASE_URL + "?origin=New%20York&destination=B&key=secret&mode=walking")

    assert "secret" not in redacted
    assert "key=***" in redacted
    assert "origin=New+York" in redacted
    assert redacted.endswith("mode=walking")


def test_travel_mode_membership():
    assert TravelMode.is_known("bicycling")
    assert not TravelMode.is_known("flying")
    assert not TravelMode.is_known("")


def test_routing_request_requires_non_empty_places():
    with pytest.raises(ValueError):
        RoutingRequest(origin="", destination="B")
