"""Shared fixtures for the NPS client tests."""

from collections.abc import Callable, Iterator

import httpx
import pytest

from nps_client import api

TEST_TOKEN = "test-api-key"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def client_factory() -> Iterator[Callable[..., api.Client]]:
    """Build api.Client instances backed by an httpx.MockTransport handler."""
    http_clients: list[httpx.Client] = []

    def factory(handler: Handler, **kwargs) -> api.Client:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        http_clients.append(http_client)
        return api.Client(TEST_TOKEN, http_client=http_client, **kwargs)

    yield factory

    for http_client in http_clients:
        http_client.close()


@pytest.fixture
def offline_client() -> Iterator[api.Client]:
    """Client whose transport fails the test if a request is ever sent."""

    def handler(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"unexpected request to {request.url}")

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    yield api.Client(TEST_TOKEN, http_client=http_client)
    http_client.close()
