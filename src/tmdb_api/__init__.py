# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""TMDb API - asynchronous client for The Movie Database API.

Every call goes through one pipeline: build the request, wait for
admission under the shared rate limit, send it, map the response to a
typed result or a typed error.

Key Features:
    - First-come-first-served admission under a sliding-window limit
      and an in-flight cap, shared across any number of coroutines
    - v3 API key, v4 read token and v4 access token authentication
    - Typed results through pydantic, with polymorphic ``media_type`` decoding
    - One exception hierarchy for local, transport and provider failures
    - Prometheus metrics

Quick Start:
    >>> from tmdb_api import TMDbClient
    >>>
    >>> async with TMDbClient.from_token("0123456789abcdef0123456789abcdef") as client:
    ...     movie = await client.movie(603).details(language="en-US")
    ...     page = await client.trending("week").all()

Sharing one limit between clients:
    >>> from tmdb_api import AdmissionGate, RateLimitConfig
    >>> gate = AdmissionGate.from_config(RateLimitConfig(max_requests=20))
    >>> first = TMDbClient(config_a, gate=gate)
    >>> second = TMDbClient(config_b, gate=gate)

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import TMDbClient
from .config import DEFAULT_BASE_URL, ClientConfig, RateLimitConfig
from .credentials import CredentialKind, Credentials
from .endpoints import TrendingTimeWindow
from .exceptions import (
    AdmissionError,
    ConfigurationError,
    DecodeFailureError,
    ErrorKind,
    MalformedBaseUrlError,
    MalformedRequestUrlError,
    ProviderError,
    RequestError,
    TMDbError,
    TransportFailureError,
)
from .limiter import AdmissionGate, AdmissionTicket, WindowTracker
from .request import RequestBuilder
from .response import ResponseMapper
from .schema.media import MediaItem, MediaTypeResolver
from .transport import RawResponse, Transport
from .types import HttpMethod, Outcome, RequestDescriptor

__all__ = [
    "DEFAULT_BASE_URL",
    "AdmissionError",
    # Limiter
    "AdmissionGate",
    "AdmissionTicket",
    # Configuration
    "ClientConfig",
    "ConfigurationError",
    "CredentialKind",
    "Credentials",
    "DecodeFailureError",
    "ErrorKind",
    "HttpMethod",
    "MalformedBaseUrlError",
    "MalformedRequestUrlError",
    "MediaItem",
    "MediaTypeResolver",
    "Outcome",
    "ProviderError",
    "RateLimitConfig",
    "RawResponse",
    # Pipeline
    "RequestBuilder",
    "RequestDescriptor",
    "RequestError",
    "ResponseMapper",
    # Client
    "TMDbClient",
    # Exceptions
    "TMDbError",
    "Transport",
    "TransportFailureError",
    "TrendingTimeWindow",
    "WindowTracker",
]
