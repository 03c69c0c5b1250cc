"""Pytest fixtures for the C2B relay tests."""

import json
import os

# c2b_relay.api.main builds an app on import; keep a developer's .env from
# selecting the real client before any test runs.
os.environ["INTEGRATIONS_MODE"] = "mock"

import httpx
import pytest

from c2b_relay.api.main import create_app
from c2b_relay.integrations.clients.real_http.mpesa import RealMpesaC2BClient
from c2b_relay.utils.config_loader import RelayConfig


class BrokenStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset while reading body")
        yield b""  # pragma: no cover


def broken_body(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, stream=BrokenStream())


class FakeUpstream:
    """Records requests sent to the Daraja simulate endpoint and replies with a canned body."""

    def __init__(self, status_code: int = 200, body: bytes = b"OK"):
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def relay_config():
    return RelayConfig()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def make_app(relay_config):
    """Build an app whose real M-Pesa client talks to the given transport handler."""

    def _make(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = RealMpesaC2BClient(relay_config.mpesa, token="test-token", http_client=http_client)
        return create_app(config=relay_config, c2b_client=client)

    return _make


@pytest.fixture
def broken_body_handler():
    """Transport handler whose response body fails mid-read."""
    return broken_body
