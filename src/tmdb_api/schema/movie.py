# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Movie details payload (``GET /3/movie/{movie_id}``)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Genre(BaseModel):
    id: int
    name: str


class MovieDetails(BaseModel):
    """
    Primary details of a movie.

    Sections requested with ``append_to_response`` (credits, videos, ...)
    are kept as raw JSON in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    title: str | None = None
    original_title: str | None = None
    original_language: str | None = None
    overview: str | None = None
    tagline: str | None = None
    status: str | None = None
    release_date: str | None = None
    runtime: int | None = None
    budget: int | None = None
    revenue: int | None = None
    imdb_id: str | None = None
    homepage: str | None = None
    adult: bool = False
    popularity: float | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genres: list[Genre] = Field(default_factory=list)

    def appended(self, name: str) -> Any:
        """Return an ``append_to_response`` section, or None if absent."""
        return (self.model_extra or {}).get(name)
