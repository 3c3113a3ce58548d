"""Shared fixtures for client-level tests."""

import httpx
import pytest

from tmdb_api.client import TMDbClient
from tmdb_api.config import ClientConfig, RateLimitConfig
from tmdb_api.credentials import Credentials
from tmdb_api.observability.collector import MetricsCollector

MOVIE_BODY = '{"id": 603, "title": "The Matrix", "runtime": 136}'


class RecordingHandler:
    """MockTransport handler that records requests and replies with a canned response."""

    def __init__(self, status_code=200, body=MOVIE_BODY):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def metrics():
    return MetricsCollector(enable_prometheus=False)


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def make_client(metrics):
    """Build a TMDbClient whose HTTP traffic goes to a MockTransport handler."""

    def factory(handler, config=None, **kwargs):
        if config is None:
            config = ClientConfig(
                credentials=Credentials(api_key="ABC"),
                rate_limit=RateLimitConfig(max_requests=1000),
            )
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("metrics", metrics)
        return TMDbClient(config, http_client=http_client, **kwargs)

    return factory


@pytest.fixture
def reply():
    """Factory for handlers answering with a given status and body."""
    return RecordingHandler
