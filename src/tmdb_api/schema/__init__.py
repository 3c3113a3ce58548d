# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Pydantic models for TMDb response and request payloads."""

from .account import AccountDetails, FavoriteRequest
from .media import (
    DEFAULT_MEDIA_RESOLVER,
    MEDIA_RESOLVER_CONTEXT_KEY,
    MediaItem,
    MediaResult,
    MediaTypeResolver,
    MovieResult,
    PersonResult,
    TvResult,
)
from .movie import Genre, MovieDetails
from .page import ResultsPage
from .status import StatusSchema

__all__ = [
    "DEFAULT_MEDIA_RESOLVER",
    "MEDIA_RESOLVER_CONTEXT_KEY",
    "AccountDetails",
    "FavoriteRequest",
    "Genre",
    "MediaItem",
    "MediaResult",
    "MediaTypeResolver",
    "MovieDetails",
    "MovieResult",
    "PersonResult",
    "ResultsPage",
    "StatusSchema",
    "TvResult",
]
