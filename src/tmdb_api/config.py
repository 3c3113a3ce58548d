# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the TMDb API client

This module provides configuration classes for the client facade and for
the admission gate that rate limits it.
"""

from dataclasses import dataclass, field

from .credentials import Credentials

DEFAULT_BASE_URL = "https://api.themoviedb.org"


@dataclass
class RateLimitConfig:
    """
    Admission policy shared by every call made through one gate.

    A call is admitted when fewer than ``max_requests`` admissions happened
    in the trailing ``window_seconds`` AND fewer than ``max_in_flight``
    calls are outstanding. The defaults stay under TMDb's published limits
    (around 50 requests per second, 20 connections per IP).
    """

    max_requests: int = 40
    """Maximum admissions in any trailing window."""

    window_seconds: float = 1.0
    """Length of the sliding window in seconds."""

    max_in_flight: int = 20
    """Maximum number of admitted calls not yet released."""

    name: str = "default"
    """Value of the ``gate`` label on admission metrics."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if self.max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        if not self.name:
            raise ValueError("name must not be empty")


@dataclass
class ClientConfig:
    """
    Configuration for the TMDb client facade.
    """

    # === Endpoint ===

    base_url: str = DEFAULT_BASE_URL
    """Absolute base URL every endpoint path is resolved against."""

    # === Authentication ===

    credentials: Credentials = field(default_factory=Credentials)
    """API key, tokens and session identifiers."""

    default_language: str | None = None
    """ISO 639-1 language tag sent when a call does not specify one."""

    # === Transport ===

    timeout: float = 30.0
    """Request timeout in seconds."""

    follow_redirects: bool = True
    """Follow HTTP redirects."""

    # === Rate Limiting ===

    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    """Admission policy for the gate created by the client (ignored when a gate is injected)."""

    # === Metrics ===

    metrics_enabled: bool = True
    """Record request metrics."""

    # === Testing Support ===

    testing: bool = False
    """Retain the last raw response body for inspection."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")


__all__ = [
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "RateLimitConfig",
]
