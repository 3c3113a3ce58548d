# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
TMDbClient: the facade every call goes through.

Per call: build the request, wait for an admission ticket, send it, give
the ticket back (always), then map the response. Only the admission wait
is serialized; admitted calls run concurrently.
"""

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel
from typing_extensions import Self

from .config import DEFAULT_BASE_URL, ClientConfig
from .credentials import CredentialKind, Credentials
from .endpoints import (
    AccountEndpoint,
    MovieEndpoint,
    SearchEndpoint,
    TrendingEndpoint,
    TrendingTimeWindow,
)
from .exceptions import ErrorKind, ProviderError, TMDbError
from .limiter.gate import AdmissionGate
from .observability.collector import MetricsCollector, get_metrics_collector
from .observability.constants import (
    REQUEST_DURATION_SECONDS,
    REQUESTS_FAILED_TOTAL,
    REQUESTS_TOTAL,
)
from .request import RequestBuilder
from .response import ResponseMapper
from .transport import Transport
from .types.outcome import Outcome
from .types.request import HttpMethod, QueryValue, RequestDescriptor

logger = logging.getLogger(__name__)

Body = str | BaseModel | Mapping[str, Any] | None


def encode_body(body: Body) -> str | None:
    """Serialize a request body to the JSON text sent on the wire."""
    if body is None or isinstance(body, str):
        return body
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True)
    return json.dumps(dict(body))


class TMDbClient:
    """
    Asynchronous TMDb API client.

    TMDb requires either an API key (v3), a read token (v4) or an access
    token (v4). Without any of them the client still works against
    endpoints that accept anonymous calls, or once an access token is set.

    The admission gate is owned by the client unless one is injected;
    inject the same gate into several clients to put them under one limit.

    Example:
        >>> async with TMDbClient.from_token("0123456789abcdef0123456789abcdef") as client:
        ...     movie = await client.movie(603).details()
        ...     page = await client.search("matrix").multi()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        gate: AdmissionGate | None = None,
        transport: Transport | None = None,
        http_client: httpx.AsyncClient | None = None,
        mapper: ResponseMapper | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration (default: ClientConfig())
            gate: Admission gate to share (default: one built from config.rate_limit)
            transport: Transport to send through (default: built from config)
            http_client: httpx client for the default transport (ignored with transport)
            mapper: Response mapper (default: ResponseMapper())
            metrics: Metrics collector (default: the process-wide collector)
        """
        self._config = config or ClientConfig()

        if metrics is None and self._config.metrics_enabled:
            metrics = get_metrics_collector()
        self._metrics = metrics

        self._gate = gate or AdmissionGate.from_config(
            self._config.rate_limit, metrics=self._metrics
        )
        self._transport = transport or Transport(
            http_client=http_client,
            timeout=self._config.timeout,
            follow_redirects=self._config.follow_redirects,
        )
        self._builder = RequestBuilder(self._config)
        self._mapper = mapper or ResponseMapper()
        self._last_body: str | None = None

        logger.debug(
            "Initialized %s for %s (API v%d)",
            self.__class__.__name__,
            self._config.base_url,
            self.version,
        )

    @classmethod
    def from_token(
        cls,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        kind: CredentialKind | None = None,
        **kwargs: Any,
    ) -> Self:
        """
        Create a client from a single API key or token.

        Without ``kind``, tokens longer than 32 characters are read tokens
        and shorter ones API keys.
        """
        config = ClientConfig(
            base_url=base_url, credentials=Credentials.from_token(token, kind)
        )
        return cls(config, **kwargs)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    # === Configuration ===

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def credentials(self) -> Credentials:
        return self._config.credentials

    @property
    def gate(self) -> AdmissionGate:
        return self._gate

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._config.base_url = value

    @property
    def api_key(self) -> str | None:
        return self.credentials.api_key

    @api_key.setter
    def api_key(self, value: str | None) -> None:
        self.credentials.api_key = value

    @property
    def read_token(self) -> str | None:
        return self.credentials.read_token

    @read_token.setter
    def read_token(self, value: str | None) -> None:
        self.credentials.read_token = value

    @property
    def access_token(self) -> str | None:
        return self.credentials.access_token

    @access_token.setter
    def access_token(self, value: str | None) -> None:
        self.credentials.access_token = value

    @property
    def session_id(self) -> str | None:
        return self.credentials.session_id

    @session_id.setter
    def session_id(self, value: str | None) -> None:
        self.credentials.session_id = value

    @property
    def guest_session_id(self) -> str | None:
        return self.credentials.guest_session_id

    @guest_session_id.setter
    def guest_session_id(self, value: str | None) -> None:
        self.credentials.guest_session_id = value

    @property
    def default_language(self) -> str | None:
        return self._config.default_language

    @default_language.setter
    def default_language(self, value: str | None) -> None:
        self._config.default_language = value

    @property
    def testing(self) -> bool:
        return self._config.testing

    @testing.setter
    def testing(self, value: bool) -> None:
        self._config.testing = value

    @property
    def version(self) -> int:
        """API version implied by the credentials: 4 with a read token, else 3."""
        return self.credentials.version

    @property
    def last_body(self) -> str | None:
        """Raw body of the last response, kept only while ``testing`` is on."""
        return self._last_body

    # === Verbs ===

    async def get(
        self,
        endpoint: str,
        result_type: Any = None,
        query: Mapping[str, QueryValue] | None = None,
    ) -> Any:
        return await self.request(
            RequestDescriptor(endpoint, HttpMethod.GET, query or {}, None, result_type)
        )

    async def post(
        self,
        endpoint: str,
        result_type: Any = None,
        query: Mapping[str, QueryValue] | None = None,
        body: Body = None,
    ) -> Any:
        return await self.request(
            RequestDescriptor(
                endpoint, HttpMethod.POST, query or {}, encode_body(body), result_type
            )
        )

    async def put(
        self,
        endpoint: str,
        result_type: Any = None,
        query: Mapping[str, QueryValue] | None = None,
        body: Body = None,
    ) -> Any:
        return await self.request(
            RequestDescriptor(
                endpoint, HttpMethod.PUT, query or {}, encode_body(body), result_type
            )
        )

    async def delete(
        self,
        endpoint: str,
        result_type: Any = None,
        query: Mapping[str, QueryValue] | None = None,
    ) -> Any:
        return await self.request(
            RequestDescriptor(endpoint, HttpMethod.DELETE, query or {}, None, result_type)
        )

    # === Pipeline ===

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """
        Run one call through the pipeline.

        Returns:
            The decoded result (None when descriptor.result_type is None)

        Raises:
            MalformedBaseUrlError, MalformedRequestUrlError: URL construction failed
            TransportFailureError: The network call failed
            ProviderError: TMDb answered with a non-2xx status
            DecodeFailureError: A 2xx body did not match result_type
            asyncio.CancelledError: The call was cancelled
        """
        method = descriptor.method.value
        try:
            request = self._builder.build(descriptor)

            async with self._gate.admit():
                started = time.monotonic()
                response = await self._transport.send(request)
                self._observe(
                    REQUEST_DURATION_SECONDS,
                    time.monotonic() - started,
                    {"method": method},
                )

            if self._config.testing:
                self._last_body = response.text

            result = self._mapper.map(response, descriptor.result_type)
        except TMDbError as e:
            self._record_failure(method, e.kind)
            if isinstance(e, ProviderError):
                logger.warning(
                    "TMDb error on %s %s: %s", method, descriptor.endpoint, e
                )
            raise
        except asyncio.CancelledError:
            self._record_failure(method, ErrorKind.CANCELLED)
            raise

        self._count(REQUESTS_TOTAL, {"method": method, "outcome": "success"})
        return result

    async def send(self, descriptor: RequestDescriptor) -> Outcome[Any]:
        """
        Run one call and return its Outcome instead of raising.

        Cancellation is not an outcome: ``asyncio.CancelledError`` propagates.
        """
        try:
            return Outcome.success(await self.request(descriptor))
        except TMDbError as e:
            return Outcome.failure(e)

    def _record_failure(self, method: str, kind: ErrorKind | None) -> None:
        reason = kind.value if kind is not None else "unknown"
        self._count(REQUESTS_TOTAL, {"method": method, "outcome": "failure"})
        self._count(REQUESTS_FAILED_TOTAL, {"method": method, "reason": reason})

    def _count(self, name: str, labels: dict[str, str]) -> None:
        if self._metrics is not None:
            self._metrics.inc_counter(name, labels=labels)

    def _observe(self, name: str, value: float, labels: dict[str, str]) -> None:
        if self._metrics is not None:
            self._metrics.observe_histogram(name, value, labels=labels)

    # === Resource accessors ===

    def movie(self, movie_id: int) -> MovieEndpoint:
        return MovieEndpoint(self, movie_id)

    def search(self, query: str) -> SearchEndpoint:
        return SearchEndpoint(self, query)

    def trending(self, time_window: TrendingTimeWindow | str) -> TrendingEndpoint:
        return TrendingEndpoint(self, time_window)

    def account(self) -> AccountEndpoint:
        return AccountEndpoint(self)


__all__ = ["TMDbClient", "encode_body"]
