# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Outbound request construction.

RequestBuilder turns a RequestDescriptor plus the client-wide settings
(base URL, credentials, default language) into a ready-to-send
``httpx.Request``. It performs no I/O.
"""

import logging
from collections.abc import Mapping
from urllib.parse import urlencode

import httpx

from .config import ClientConfig
from .exceptions import MalformedBaseUrlError, MalformedRequestUrlError
from .types.request import QueryValue, RequestDescriptor

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json;charset=utf-8"
ACCEPT = "application/json"


def render_value(value: QueryValue) -> str | None:
    """Render a query value as text; None for values that must not be sent."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if not text.strip():
        return None
    return text


def encode_query(
    query: Mapping[str, QueryValue],
    api_key: str | None = None,
    default_language: str | None = None,
) -> str:
    """
    Build the percent-encoded query string for a call.

    None, empty and all-whitespace values are dropped. ``api_key`` and
    ``default_language`` fill in the ``api_key`` and ``language``
    parameters when the caller left them out or blank.

    Returns:
        The encoded query, without the leading "?" (empty if nothing is sent)
    """
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        text = render_value(value)
        if text is not None:
            pairs.append((key, text))

    present = {key for key, _ in pairs}
    if api_key and "api_key" not in present:
        pairs.append(("api_key", api_key))
    if default_language and "language" not in present:
        pairs.append(("language", default_language))

    return urlencode(pairs)


class RequestBuilder:
    """
    Builds ``httpx.Request`` objects from descriptors.

    Settings are read from the ClientConfig at build time, so changes made
    to the config between calls apply to the next call.
    """

    def __init__(self, config: ClientConfig):
        self._config = config

    def resolve_base_url(self) -> httpx.URL:
        """
        Parse the configured base URL.

        Raises:
            MalformedBaseUrlError: If it is not an absolute URI with a host
        """
        base_url = self._config.base_url
        try:
            url = httpx.URL(base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise MalformedBaseUrlError(base_url) from e
        if not url.is_absolute_url:
            raise MalformedBaseUrlError(base_url)
        return url

    def build_url(self, descriptor: RequestDescriptor) -> httpx.URL:
        """
        Resolve endpoint and encoded query against the base URL.

        Raises:
            MalformedBaseUrlError: If the base URL cannot be parsed
            MalformedRequestUrlError: If the endpoint cannot be resolved
        """
        base = self.resolve_base_url()
        credentials = self._config.credentials

        query = encode_query(
            descriptor.query,
            api_key=credentials.api_key if credentials.uses_api_key else None,
            default_language=self._config.default_language,
        )
        target = f"{descriptor.endpoint}?{query}" if query else descriptor.endpoint

        try:
            return base.join(target)
        except httpx.InvalidURL as e:
            raise MalformedRequestUrlError(descriptor.endpoint) from e

    def build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": CONTENT_TYPE, "Accept": ACCEPT}
        token = self._config.credentials.bearer_token
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def build(self, descriptor: RequestDescriptor) -> httpx.Request:
        """
        Build the complete outbound request.

        Raises:
            MalformedBaseUrlError: If the base URL cannot be parsed
            MalformedRequestUrlError: If the endpoint cannot be resolved
        """
        url = self.build_url(descriptor)
        content = descriptor.body.encode("utf-8") if descriptor.body is not None else None

        logger.debug("Built %s %s", descriptor.method.value, descriptor.endpoint)
        return httpx.Request(
            descriptor.method.value,
            url,
            headers=self.build_headers(),
            content=content,
        )


__all__ = [
    "ACCEPT",
    "CONTENT_TYPE",
    "RequestBuilder",
    "encode_query",
    "render_value",
]
