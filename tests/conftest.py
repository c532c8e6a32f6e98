import os

import httpx
import pytest
from fastapi.testclient import TestClient

TEST_API_KEY = "test-key-8f3a1c"

os.environ["GOOGLE_MAPS_API_KEY"] = TEST_API_KEY
os.environ.setdefault("LOG_LEVEL", "WARNING")

from core.config import get_settings  # noqa: E402
from main import create_app  # noqa: E402

OK_PAYLOAD = {"status": "OK", "routes": []}


class UpstreamStub:
    """Records outbound requests and answers them with a configurable handler."""

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(200, json=OK_PAYLOAD)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_params(self):
        return self.requests[-1].url.params


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
def make_client(upstream):
    """Build a test client, optionally overriding settings fields."""
    clients = []

    def _make(**overrides):
        app = create_app(upstream_transport=httpx.MockTransport(upstream))
        if overrides:
            patched = get_settings().model_copy(update=overrides)
            app.dependency_overrides[get_settings] = lambda: patched
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
