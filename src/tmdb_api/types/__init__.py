# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .media import MEDIA_TYPES, MOVIE, PERSON, TV
from .outcome import Outcome
from .request import HttpMethod, QueryValue, RequestDescriptor

__all__ = [
    # Media types
    "MEDIA_TYPES",
    "MOVIE",
    "PERSON",
    "TV",
    "HttpMethod",
    # Outcome
    "Outcome",
    "QueryValue",
    # Request descriptor
    "RequestDescriptor",
]
