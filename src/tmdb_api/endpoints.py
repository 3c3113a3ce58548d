# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Resource accessors.

Each accessor knows one TMDb resource: it builds the endpoint path and
query for an operation and forwards to the client facade with the type the
response decodes to. None of them touch HTTP directly.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigurationError
from .schema.account import AccountDetails, FavoriteRequest
from .schema.media import MediaItem, MovieResult, PersonResult, TvResult
from .schema.movie import MovieDetails
from .schema.page import ResultsPage
from .schema.status import StatusSchema
from .types.media import MEDIA_TYPES, MOVIE, PERSON, TV

if TYPE_CHECKING:
    from .client import TMDbClient


class TrendingTimeWindow(Enum):
    DAY = "day"
    WEEK = "week"


class MovieEndpoint:
    """``/3/movie/{movie_id}``"""

    def __init__(self, client: "TMDbClient", movie_id: int):
        self._client = client
        self.movie_id = movie_id

    async def details(
        self,
        language: str | None = None,
        append_to_response: list[str] | None = None,
    ) -> MovieDetails:
        query: dict[str, Any] = {"language": language}
        if append_to_response:
            query["append_to_response"] = ",".join(append_to_response)
        return await self._client.get(f"/3/movie/{self.movie_id}", MovieDetails, query)


class SearchEndpoint:
    """``/3/search/...``"""

    def __init__(self, client: "TMDbClient", query: str):
        self._client = client
        self.query = query

    def _query(self, page: int, include_adult: bool, language: str | None) -> dict[str, Any]:
        return {
            "query": self.query,
            "page": page,
            "include_adult": include_adult,
            "language": language,
        }

    async def multi(
        self, page: int = 1, include_adult: bool = False, language: str | None = None
    ) -> ResultsPage[MediaItem]:
        """Movies, TV shows and people in one list, tagged by media_type."""
        return await self._client.get(
            "/3/search/multi",
            ResultsPage[MediaItem],
            self._query(page, include_adult, language),
        )

    async def movie(
        self, page: int = 1, include_adult: bool = False, language: str | None = None
    ) -> ResultsPage[MovieResult]:
        return await self._client.get(
            "/3/search/movie",
            ResultsPage[MovieResult],
            self._query(page, include_adult, language),
        )

    async def tv(
        self, page: int = 1, include_adult: bool = False, language: str | None = None
    ) -> ResultsPage[TvResult]:
        return await self._client.get(
            "/3/search/tv",
            ResultsPage[TvResult],
            self._query(page, include_adult, language),
        )


class TrendingEndpoint:
    """``/3/trending/{media_type}/{time_window}``"""

    def __init__(self, client: "TMDbClient", time_window: TrendingTimeWindow | str):
        self._client = client
        self.time_window = TrendingTimeWindow(time_window)

    def _path(self, media_type: str) -> str:
        return f"/3/trending/{media_type}/{self.time_window.value}"

    async def all(self, page: int = 1, language: str | None = None) -> ResultsPage[MediaItem]:
        return await self._client.get(
            self._path("all"), ResultsPage[MediaItem], {"page": page, "language": language}
        )

    async def movies(self, page: int = 1, language: str | None = None) -> ResultsPage[MovieResult]:
        return await self._client.get(
            self._path(MOVIE), ResultsPage[MovieResult], {"page": page, "language": language}
        )

    async def tv(self, page: int = 1, language: str | None = None) -> ResultsPage[TvResult]:
        return await self._client.get(
            self._path(TV), ResultsPage[TvResult], {"page": page, "language": language}
        )

    async def people(self, page: int = 1, language: str | None = None) -> ResultsPage[PersonResult]:
        return await self._client.get(
            self._path(PERSON), ResultsPage[PersonResult], {"page": page, "language": language}
        )


class AccountEndpoint:
    """``/3/account`` (session bound)."""

    def __init__(self, client: "TMDbClient"):
        self._client = client

    def _session_query(self) -> dict[str, Any]:
        session_id = self._client.session_id
        if not session_id:
            raise ConfigurationError("Account endpoints require a session_id")
        return {"session_id": session_id}

    async def details(self) -> AccountDetails:
        return await self._client.get("/3/account", AccountDetails, self._session_query())

    async def favorite(
        self, account_id: int, media_type: str, media_id: int, favorite: bool = True
    ) -> StatusSchema:
        """Mark or unmark a movie or TV show as a favorite."""
        if media_type not in MEDIA_TYPES - {PERSON}:
            raise ValueError(f"media_type must be '{MOVIE}' or '{TV}', got {media_type!r}")
        body = FavoriteRequest(media_type=media_type, media_id=media_id, favorite=favorite)
        return await self._client.post(
            f"/3/account/{account_id}/favorite",
            StatusSchema,
            self._session_query(),
            body,
        )


__all__ = [
    "AccountEndpoint",
    "MovieEndpoint",
    "SearchEndpoint",
    "TrendingEndpoint",
    "TrendingTimeWindow",
]
