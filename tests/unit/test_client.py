"""Tests for the TMDbClient facade."""

import asyncio
import json

import httpx
import pytest
from pydantic import BaseModel

from tmdb_api import (
    AdmissionGate,
    ClientConfig,
    CredentialKind,
    Credentials,
    DecodeFailureError,
    ErrorKind,
    MalformedBaseUrlError,
    ProviderError,
    RateLimitConfig,
    RequestDescriptor,
    TMDbClient,
    TransportFailureError,
)
from tmdb_api.client import encode_body
from tmdb_api.observability.constants import REQUESTS_FAILED_TOTAL, REQUESTS_TOTAL
from tmdb_api.schema import MovieDetails, StatusSchema


class Rating(BaseModel):
    value: float
    note: str | None = None


class BlockingHandler:
    """Handler that holds every request until released."""

    def __init__(self):
        self.started = asyncio.Event()
        self.proceed = asyncio.Event()
        self.calls = 0

    async def __call__(self, request):
        self.calls += 1
        self.started.set()
        await self.proceed.wait()
        return httpx.Response(200, text="{}")


class TestEncodeBody:
    def test_none_and_text_pass_through(self):
        assert encode_body(None) is None
        assert encode_body('{"a": 1}') == '{"a": 1}'

    def test_mapping(self):
        assert json.loads(encode_body({"value": 8.5})) == {"value": 8.5}

    def test_model_drops_unset_optionals(self):
        assert json.loads(encode_body(Rating(value=8.5))) == {"value": 8.5}


class TestVerbs:
    """Tests for get/post/put/delete."""

    @pytest.mark.asyncio
    async def test_get_decodes_result(self, make_client, handler):
        client = make_client(handler)

        movie = await client.get("/3/movie/603", MovieDetails, {"language": "en-US"})

        assert movie.title == "The Matrix"
        assert handler.last.method == "GET"
        assert handler.last.url.path == "/3/movie/603"
        assert handler.last.url.params["language"] == "en-US"
        assert handler.last.url.params["api_key"] == "ABC"

    @pytest.mark.asyncio
    async def test_post_sends_body(self, make_client, reply):
        handler = reply(201, '{"status_code": 1, "status_message": "Success."}')
        client = make_client(handler)

        status = await client.post("/3/movie/603/rating", StatusSchema, body=Rating(value=8.5))

        assert status.status_code == 1
        assert handler.last.method == "POST"
        assert json.loads(handler.last.content) == {"value": 8.5}

    @pytest.mark.asyncio
    async def test_put_and_delete(self, make_client, reply):
        handler = reply(200, '{"status_code": 12, "status_message": "Updated."}')
        client = make_client(handler)

        await client.put("/3/list/1", StatusSchema, body={"name": "Favourites"})
        assert handler.last.method == "PUT"
        assert json.loads(handler.last.content) == {"name": "Favourites"}

        await client.delete("/3/list/1", StatusSchema)
        assert handler.last.method == "DELETE"
        assert handler.last.content == b""

    @pytest.mark.asyncio
    async def test_without_result_type(self, make_client, reply):
        client = make_client(reply(204, ""))
        assert await client.delete("/3/movie/603/rating") is None


class TestErrors:
    """Tests for failures surfacing through the facade."""

    @pytest.mark.asyncio
    async def test_provider_error(self, make_client, reply):
        handler = reply(
            404, '{"status_code": 34, "status_message": "The resource you requested could not be found."}'
        )
        client = make_client(handler)

        with pytest.raises(ProviderError) as exc_info:
            await client.get("/3/movie/0", MovieDetails)

        assert exc_info.value.status_code == 34
        assert client.gate.in_flight == 0

    @pytest.mark.asyncio
    async def test_decode_failure(self, make_client, reply):
        client = make_client(reply(200, '{"title": "no id"}'))

        with pytest.raises(DecodeFailureError):
            await client.get("/3/movie/603", MovieDetails)

    @pytest.mark.asyncio
    async def test_transport_failure_releases_ticket(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(TransportFailureError) as exc_info:
            await client.get("/3/movie/603", MovieDetails)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert client.gate.in_flight == 0

    @pytest.mark.asyncio
    async def test_malformed_base_url_sends_nothing(self, make_client, handler):
        client = make_client(handler, ClientConfig(base_url="not a url"))

        with pytest.raises(MalformedBaseUrlError):
            await client.get("/3/movie/603", MovieDetails)

        assert handler.requests == []
        assert client.gate.tracker.admissions_in_window == 0

    @pytest.mark.asyncio
    async def test_failures_are_counted(self, make_client, reply, metrics):
        client = make_client(reply(500, "oops"))

        with pytest.raises(ProviderError):
            await client.get("/3/movie/603", MovieDetails)

        counters = metrics.get_metrics()["counters"]
        assert counters[REQUESTS_TOTAL]["method=GET,outcome=failure"] == 1
        assert counters[REQUESTS_FAILED_TOTAL]["method=GET,reason=provider_error"] == 1


class TestSend:
    """Tests for Outcome-returning calls."""

    @pytest.mark.asyncio
    async def test_success(self, make_client, handler):
        client = make_client(handler)

        outcome = await client.send(RequestDescriptor("/3/movie/603", result_type=MovieDetails))

        assert outcome.ok
        assert outcome.kind is None
        assert outcome.unwrap().id == 603

    @pytest.mark.asyncio
    async def test_local_failure(self, make_client, handler):
        client = make_client(handler, ClientConfig(base_url="/relative"))

        outcome = await client.send(RequestDescriptor("/3/movie/603"))

        assert not outcome.ok
        assert outcome.kind is ErrorKind.MALFORMED_BASE_URL
        assert outcome.is_local_failure

    @pytest.mark.asyncio
    async def test_provider_failure(self, make_client, reply):
        client = make_client(reply(401, '{"status_code": 7, "status_message": "Invalid API key"}'))

        outcome = await client.send(RequestDescriptor("/3/movie/603"))

        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert not outcome.is_local_failure
        with pytest.raises(ProviderError):
            outcome.unwrap()


class TestCancellation:
    """Tests for calls abandoned mid-flight."""

    @pytest.mark.asyncio
    async def test_cancel_during_transport_releases_ticket(self, make_client):
        handler = BlockingHandler()
        client = make_client(handler)

        task = asyncio.create_task(client.get("/3/movie/603", dict))
        await asyncio.wait_for(handler.started.wait(), timeout=1.0)
        assert client.gate.in_flight == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert client.gate.in_flight == 0

    @pytest.mark.asyncio
    async def test_cancel_while_queued(self, make_client, handler):
        gate = AdmissionGate.from_config(RateLimitConfig(max_in_flight=1))
        client = make_client(handler, gate=gate)
        held = await gate.acquire()

        task = asyncio.create_task(client.send(RequestDescriptor("/3/movie/603")))
        for _ in range(5):
            await asyncio.sleep(0)
        assert gate.waiting == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        gate.release(held)
        assert gate.in_flight == 0
        assert gate.waiting == 0
        assert handler.requests == []


class TestSharedGate:
    @pytest.mark.asyncio
    async def test_clients_share_one_limit(self, make_client, reply):
        gate = AdmissionGate.from_config(RateLimitConfig(max_in_flight=1))
        slow = BlockingHandler()
        first = make_client(slow, gate=gate)
        second = make_client(reply(), gate=gate)

        blocked = asyncio.create_task(first.get("/3/movie/603", dict))
        await asyncio.wait_for(slow.started.wait(), timeout=1.0)

        queued = asyncio.create_task(second.get("/3/movie/603", MovieDetails))
        for _ in range(5):
            await asyncio.sleep(0)
        assert gate.waiting == 1
        assert not queued.done()

        slow.proceed.set()
        await asyncio.wait_for(blocked, timeout=1.0)
        movie = await asyncio.wait_for(queued, timeout=1.0)

        assert movie.id == 603
        assert gate.in_flight == 0


class TestConfiguration:
    """Tests for credentials and settings exposed on the client."""

    @pytest.mark.asyncio
    async def test_access_token_set_between_calls(self, make_client, handler):
        client = make_client(handler)
        await client.get("/3/movie/603")
        assert "Authorization" not in handler.last.headers

        client.access_token = "ACCESS"
        await client.get("/3/movie/603")

        assert handler.last.headers["Authorization"] == "Bearer ACCESS"
        assert "api_key" not in handler.last.url.params

    @pytest.mark.asyncio
    async def test_default_language(self, make_client, handler):
        client = make_client(handler)
        client.default_language = "pt-BR"

        await client.get("/3/movie/603")

        assert handler.last.url.params["language"] == "pt-BR"

    @pytest.mark.asyncio
    async def test_testing_keeps_last_body(self, make_client, handler):
        client = make_client(handler)
        await client.get("/3/movie/603")
        assert client.last_body is None

        client.testing = True
        await client.get("/3/movie/603")

        assert client.last_body == handler.body

    def test_session_setters(self):
        client = TMDbClient(ClientConfig(metrics_enabled=False))
        client.session_id = "session"
        client.guest_session_id = "guest"

        assert client.credentials.session_id == "session"
        assert client.credentials.guest_session_id == "guest"

    def test_from_token_short_is_api_key(self):
        client = TMDbClient.from_token("a" * 32, )
        assert client.api_key == "a" * 32
        assert client.version == 3

    def test_from_token_long_is_read_token(self):
        client = TMDbClient.from_token("r" * 33)
        assert client.read_token == "r" * 33
        assert client.version == 4

    def test_from_token_explicit_kind(self):
        client = TMDbClient.from_token("short", kind=CredentialKind.ACCESS_TOKEN)
        assert client.access_token == "short"
        assert client.api_key is None

    def test_base_url_setter(self):
        client = TMDbClient(ClientConfig(credentials=Credentials(), metrics_enabled=False))
        client.base_url = "https://example.test"
        assert client.config.base_url == "https://example.test"

    @pytest.mark.asyncio
    async def test_context_manager_keeps_injected_client_open(self, make_client, handler):
        async with make_client(handler) as client:
            await client.get("/3/movie/603")
        assert not client._transport.http_client.is_closed
