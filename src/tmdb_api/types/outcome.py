# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Outcome type returned by ``TMDbClient.send``.

An Outcome holds either the decoded result of a call or the TMDbError that
ended it. Local failures (URL construction, transport) and provider
failures travel through the same value; ``Outcome.kind`` tells them apart.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..exceptions import ErrorKind, TMDbError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a single call: a value or an error, never both.

    Attributes:
        value: The decoded result (None on failure, or when no result type was requested)
        error: The error that ended the call, if any
    """

    value: T | None = None
    error: TMDbError | None = None

    @classmethod
    def success(cls, value: T | None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TMDbError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        """Error kind of a failed outcome, None on success."""
        return self.error.kind if self.error is not None else None

    @property
    def is_local_failure(self) -> bool:
        return self.error is not None and self.error.is_local

    def unwrap(self) -> T | None:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


__all__ = ["Outcome"]
