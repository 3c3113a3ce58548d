# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request descriptor types.

This module defines the per-call request description handed to the client
facade by the resource accessors: which endpoint, which HTTP verb, which
query parameters, an optional body and the type the response decodes to.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

QueryValue = str | int | float | bool | None


class HttpMethod(Enum):
    """HTTP verbs supported by the TMDb API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT)


@dataclass
class RequestDescriptor:
    """
    Everything the facade needs to perform one call.

    A descriptor is created per call and discarded when the call returns.

    Attributes:
        endpoint: Endpoint path relative to the base URL (e.g. "/3/movie/603")
        method: HTTP verb
        query: Query parameters; None, empty and blank values are not sent
        body: Raw request body; only POST and PUT may carry one
        result_type: Type the 2xx body decodes to (None to ignore the body)
    """

    endpoint: str
    method: HttpMethod = HttpMethod.GET
    query: Mapping[str, QueryValue] = field(default_factory=dict)
    body: str | None = None
    result_type: Any = None

    def __post_init__(self) -> None:
        if self.body is not None and not self.method.has_body:
            raise ValueError(f"{self.method.value} requests do not carry a body")


__all__ = ["HttpMethod", "QueryValue", "RequestDescriptor"]
