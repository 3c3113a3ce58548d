# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response mapping.

ResponseMapper turns a raw (status, body) pair into the caller's result
type or into a typed error:

- 2xx: the body is validated as JSON against the requested type; any
  mismatch raises DecodeFailureError.
- anything else: the body is read as TMDb's status payload. If it is not
  one, the HTTP status and the raw body stand in for the status code and
  message. A ProviderError is raised either way.
"""

import functools
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .exceptions import DecodeFailureError, ProviderError
from .schema.media import DEFAULT_MEDIA_RESOLVER, MEDIA_RESOLVER_CONTEXT_KEY, MediaTypeResolver
from .schema.status import StatusSchema
from .transport import RawResponse

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=256)
def _cached_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def adapter_for(result_type: Any) -> TypeAdapter[Any]:
    """Return a (cached when hashable) TypeAdapter for result_type."""
    try:
        return _cached_adapter(result_type)
    except TypeError:
        return TypeAdapter(result_type)


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class ResponseMapper:
    """
    Maps raw responses to typed results or errors.

    Stateless apart from the media resolver, which is handed to pydantic
    through the validation context so ``MediaItem`` fields dispatch on
    ``media_type`` with it.
    """

    def __init__(self, media_resolver: MediaTypeResolver | None = None):
        self._media_resolver = media_resolver or DEFAULT_MEDIA_RESOLVER

    @property
    def media_resolver(self) -> MediaTypeResolver:
        return self._media_resolver

    def map(self, response: RawResponse, result_type: Any) -> Any:
        """
        Decode a response or raise the matching error.

        Raises:
            DecodeFailureError: If a 2xx body does not match result_type
            ProviderError: If the status is not 2xx
        """
        if is_success(response.status_code):
            return self.decode(response.text, result_type)
        raise self.provider_error(response.status_code, response.text)

    def decode(self, body: str, result_type: Any) -> Any:
        """
        Validate a JSON body against result_type (None skips decoding).

        Raises:
            DecodeFailureError: On malformed JSON or a shape mismatch
        """
        if result_type is None:
            return None

        try:
            return adapter_for(result_type).validate_json(
                body, context={MEDIA_RESOLVER_CONTEXT_KEY: self._media_resolver}
            )
        except ValidationError as e:
            logger.debug("Failed to decode body as %r: %s", result_type, e)
            raise DecodeFailureError(
                f"Response body does not match {getattr(result_type, '__name__', result_type)}: "
                f"{e.error_count()} validation error(s)",
                body=body,
                result_type=result_type,
            ) from e

    def provider_error(self, http_status: int, body: str) -> ProviderError:
        """Build the ProviderError for a non-2xx response."""
        try:
            status = StatusSchema.model_validate_json(body)
        except ValidationError:
            status = StatusSchema(status_code=http_status, status_message=body)

        return ProviderError(
            http_status=http_status,
            status_code=status.status_code,
            status_message=status.status_message,
        )


__all__ = ["ResponseMapper", "adapter_for", "is_success"]
