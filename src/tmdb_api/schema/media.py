# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Polymorphic media results.

Multi search, trending and a person's ``known_for`` list mix movies, TV
shows and people in one array, tagged by ``media_type``. Fields typed
``MediaItem`` are decoded through a MediaTypeResolver: an explicit table
from discriminator value to model.

The resolver in effect is taken from the pydantic validation context under
``MEDIA_RESOLVER_CONTEXT_KEY``; without one, DEFAULT_MEDIA_RESOLVER applies.

Example:
    >>> resolver = MediaTypeResolver()
    >>> resolver.register("collection", CollectionResult)
    >>> mapper = ResponseMapper(media_resolver=resolver)
"""

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainValidator, ValidationInfo

from ..types.media import MOVIE, PERSON, TV

MEDIA_RESOLVER_CONTEXT_KEY = "media_resolver"


class MediaResult(BaseModel):
    """Fields shared by every media variant."""

    id: int
    media_type: str
    adult: bool = False
    popularity: float | None = None


class MovieResult(MediaResult):
    media_type: str = MOVIE
    title: str | None = None
    original_title: str | None = None
    original_language: str | None = None
    overview: str | None = None
    release_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genre_ids: list[int] = Field(default_factory=list)
    vote_average: float | None = None
    vote_count: int | None = None


class TvResult(MediaResult):
    media_type: str = TV
    name: str | None = None
    original_name: str | None = None
    original_language: str | None = None
    overview: str | None = None
    first_air_date: str | None = None
    origin_country: list[str] = Field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    genre_ids: list[int] = Field(default_factory=list)
    vote_average: float | None = None
    vote_count: int | None = None


class PersonResult(MediaResult):
    media_type: str = PERSON
    name: str | None = None
    original_name: str | None = None
    gender: int | None = None
    known_for_department: str | None = None
    profile_path: str | None = None
    known_for: list["MediaItem"] = Field(default_factory=list)


class MediaTypeResolver:
    """
    Dispatch table from ``media_type`` value to result model.

    Unknown or missing discriminators are decode errors.
    """

    def __init__(self, models: Mapping[str, type[BaseModel]] | None = None):
        if models is None:
            models = {MOVIE: MovieResult, TV: TvResult, PERSON: PersonResult}
        self._models: dict[str, type[BaseModel]] = dict(models)

    def register(self, media_type: str, model: type[BaseModel]) -> None:
        """Add or replace the model used for a discriminator value."""
        self._models[media_type] = model

    @property
    def media_types(self) -> frozenset[str]:
        return frozenset(self._models)

    def model_for(self, media_type: Any) -> type[BaseModel]:
        """
        Raises:
            ValueError: If no model is registered for media_type
        """
        try:
            return self._models[media_type]
        except (KeyError, TypeError):
            raise ValueError(f"Unknown media_type: {media_type!r}") from None

    def resolve(self, value: Any, context: dict[str, Any] | None = None) -> BaseModel:
        """
        Decode one media item.

        Args:
            value: Decoded JSON object (or an already-built model)
            context: Validation context, forwarded to nested validation

        Raises:
            ValueError: If value is not an object or its media_type is unknown
        """
        if isinstance(value, BaseModel):
            return value
        if not isinstance(value, Mapping):
            raise ValueError("Media item must be a JSON object")
        model = self.model_for(value.get("media_type"))
        return model.model_validate(value, context=context)


DEFAULT_MEDIA_RESOLVER = MediaTypeResolver()


def _validate_media_item(value: Any, info: ValidationInfo) -> BaseModel:
    context = info.context if isinstance(info.context, dict) else None
    resolver = (context or {}).get(MEDIA_RESOLVER_CONTEXT_KEY, DEFAULT_MEDIA_RESOLVER)
    return resolver.resolve(value, context=context)


MediaItem = Annotated[
    MovieResult | TvResult | PersonResult,
    PlainValidator(_validate_media_item),
]

PersonResult.model_rebuild()


__all__ = [
    "DEFAULT_MEDIA_RESOLVER",
    "MEDIA_RESOLVER_CONTEXT_KEY",
    "MediaItem",
    "MediaResult",
    "MediaTypeResolver",
    "MovieResult",
    "PersonResult",
    "TvResult",
]
