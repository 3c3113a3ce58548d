# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the TMDb API client.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from TMDbError, making it easy to catch every
failure of a call with a single except clause. Failures that happen on
this side of the wire (URL construction, network I/O) derive from
RequestError so they can be told apart from errors reported by TMDb.

Cancellation is not part of this hierarchy: a cancelled call always
re-raises ``asyncio.CancelledError``.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of a failed call.

    - MALFORMED_BASE_URL: the configured base URL is not an absolute URI.
    - MALFORMED_REQUEST_URL: the endpoint and query could not be joined.
    - TRANSPORT_FAILURE: connection, timeout or TLS failure.
    - PROVIDER_ERROR: TMDb answered with a non-2xx status.
    - DECODE_FAILURE: a 2xx body did not match the requested type.
    - CANCELLED: the call was abandoned (used as a metrics label only).
    """

    MALFORMED_BASE_URL = "malformed_base_url"
    MALFORMED_REQUEST_URL = "malformed_request_url"
    TRANSPORT_FAILURE = "transport_failure"
    PROVIDER_ERROR = "provider_error"
    DECODE_FAILURE = "decode_failure"
    CANCELLED = "cancelled"


class TMDbError(Exception):
    """Base exception for all TMDb client errors.

    Example:
        try:
            movie = await client.movie(603).details()
        except TMDbError as e:
            logger.error(f"TMDb call failed ({e.kind}): {e}")
    """

    kind: ErrorKind | None = None

    @property
    def is_local(self) -> bool:
        """True when the failure happened before TMDb produced a response."""
        return False


class ConfigurationError(TMDbError):
    """Raised when client configuration is missing or inconsistent.

    Common causes include calling a session-bound endpoint without a
    session id, or constructing a client with an unusable credential.
    """

    pass


class AdmissionError(TMDbError):
    """Raised when an admission ticket is misused.

    Tickets must be released exactly once. Releasing a ticket the tracker
    does not know about (never issued, or already released) raises this
    error instead of silently corrupting the in-flight count.

    Attributes:
        ticket_id: The identifier of the offending ticket.
    """

    def __init__(self, message: str, ticket_id: int | None = None):
        super().__init__(message)
        self.ticket_id = ticket_id


class RequestError(TMDbError):
    """Base class for failures that happen on the client side of the wire."""

    @property
    def is_local(self) -> bool:
        return True


class MalformedBaseUrlError(RequestError):
    """Raised when the configured base URL is not an absolute URI.

    Attributes:
        base_url: The rejected base URL.
    """

    kind = ErrorKind.MALFORMED_BASE_URL

    def __init__(self, base_url: str):
        super().__init__(f"Base url '{base_url}' malformed")
        self.base_url = base_url


class MalformedRequestUrlError(RequestError):
    """Raised when an endpoint and its query cannot be resolved against the base URL.

    Attributes:
        endpoint: The relative endpoint path that failed to resolve.
    """

    kind = ErrorKind.MALFORMED_REQUEST_URL

    def __init__(self, endpoint: str):
        super().__init__(f"Request url malformed for endpoint '{endpoint}'")
        self.endpoint = endpoint


class TransportFailureError(RequestError):
    """Raised when the network call itself fails.

    Covers connection refusals, timeouts, TLS errors and protocol errors
    raised by the underlying HTTP client. The original exception is
    available as ``__cause__``. Retrying is left to the caller.

    Example:
        try:
            await client.get("/3/configuration", dict)
        except TransportFailureError:
            await asyncio.sleep(1.0)
            # caller-side retry
    """

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: str = "Error while sending the request"):
        super().__init__(message)


class ProviderError(TMDbError):
    """Raised when TMDb answers with a non-2xx status.

    When the error body cannot be parsed as TMDb's status schema, the
    status code falls back to the HTTP status and the message to the raw
    body text.

    Attributes:
        http_status: The HTTP status code of the response.
        status_code: TMDb's own status code (or the HTTP status if unparsable).
        status_message: TMDb's status message (or the raw body if unparsable).

    Example:
        try:
            await client.movie(0).details()
        except ProviderError as e:
            if e.status_code == 34:
                return None  # resource not found
            raise
    """

    kind = ErrorKind.PROVIDER_ERROR

    def __init__(self, http_status: int, status_code: int, status_message: str):
        super().__init__(
            f"{http_status}: TMDb status {status_code}: {status_message}"
        )
        self.http_status = http_status
        self.status_code = status_code
        self.status_message = status_message


class DecodeFailureError(TMDbError):
    """Raised when a successful response body does not match the requested type.

    Attributes:
        body: The raw response body that failed to decode.
        result_type: The type the caller asked for.
    """

    kind = ErrorKind.DECODE_FAILURE

    def __init__(self, message: str, body: str, result_type: object = None):
        super().__init__(message)
        self.body = body
        self.result_type = result_type
