# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Network transport: a thin wrapper over ``httpx.AsyncClient``."""

import logging
from dataclasses import dataclass, field

import httpx

from .exceptions import TransportFailureError

logger = logging.getLogger(__name__)


@dataclass
class RawResponse:
    """Status, body text and headers of a response, before any decoding."""

    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)


class Transport:
    """
    Sends built requests and returns raw responses.

    Owns the ``httpx.AsyncClient`` it creates; an injected client stays
    owned by the caller and is not closed by ``aclose``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        follow_redirects: bool = True,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=follow_redirects
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: httpx.Request) -> RawResponse:
        """
        Perform the network call.

        Raises:
            TransportFailureError: On connection, timeout, TLS or protocol errors
        """
        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            logger.error(
                "Transport failure for %s %s: %s",
                request.method,
                request.url.path,
                e,
            )
            raise TransportFailureError(
                f"Error while sending the request: {type(e).__name__}"
            ) from e

        return RawResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
