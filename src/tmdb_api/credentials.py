# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Credential handling for the TMDb API.

TMDb accepts three kinds of credentials: a v3 API key sent as the
``api_key`` query parameter, a v4 read access token, and a v4 user access
token. Both tokens are sent as ``Authorization: Bearer``. A request uses
exactly one scheme, in this order of precedence: access token, read token,
API key.
"""

from dataclasses import dataclass
from enum import Enum

# Tokens longer than this are treated as v4 read tokens when no kind is given.
READ_TOKEN_MIN_LENGTH = 32


class CredentialKind(Enum):
    """Kind of a credential string supplied at construction time."""

    API_KEY = "api_key"
    READ_TOKEN = "read_token"
    ACCESS_TOKEN = "access_token"


def classify_token(token: str) -> CredentialKind:
    """Guess the kind of a bare token from its length.

    v3 API keys are 32 hex characters; v4 tokens are JWTs and much longer.
    Pass an explicit CredentialKind where the caller knows better.
    """
    if len(token) > READ_TOKEN_MIN_LENGTH:
        return CredentialKind.READ_TOKEN
    return CredentialKind.API_KEY


@dataclass
class Credentials:
    """
    Credentials and session identifiers for one client.

    Fields may be reassigned between requests; the last write wins. No
    synchronization is provided for concurrent mutation while requests
    are being built, that is the caller's responsibility.
    """

    api_key: str | None = None
    read_token: str | None = None
    access_token: str | None = None
    session_id: str | None = None
    guest_session_id: str | None = None

    @classmethod
    def from_token(
        cls, token: str | None, kind: CredentialKind | None = None
    ) -> "Credentials":
        """Build credentials from a single token, classifying it if needed."""
        if not token:
            return cls()
        kind = kind or classify_token(token)
        if kind is CredentialKind.READ_TOKEN:
            return cls(read_token=token)
        if kind is CredentialKind.ACCESS_TOKEN:
            return cls(access_token=token)
        return cls(api_key=token)

    @property
    def bearer_token(self) -> str | None:
        """Token for the Authorization header; the access token wins."""
        if self.access_token is not None:
            return self.access_token
        return self.read_token

    @property
    def uses_api_key(self) -> bool:
        """True when requests authenticate with the ``api_key`` query parameter."""
        return bool(self.api_key) and self.bearer_token is None

    @property
    def version(self) -> int:
        """API version implied by the credentials (4 with a read token, else 3)."""
        return 4 if self.read_token is not None else 3

    def __repr__(self) -> str:
        def mask(value: str | None) -> str | None:
            return None if value is None else "***"

        return (
            f"Credentials(api_key={mask(self.api_key)!r}, "
            f"read_token={mask(self.read_token)!r}, "
            f"access_token={mask(self.access_token)!r}, "
            f"session_id={mask(self.session_id)!r}, "
            f"guest_session_id={mask(self.guest_session_id)!r})"
        )


__all__ = [
    "READ_TOKEN_MIN_LENGTH",
    "CredentialKind",
    "Credentials",
    "classify_token",
]
