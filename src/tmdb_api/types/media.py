# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Media type constants for the ``media_type`` discriminator.

TMDb tags polymorphic results (multi search, trending) with a
``media_type`` field. These are the values the default resolver knows.

Constants:
    MOVIE: Feature films
    TV: TV shows
    PERSON: Cast and crew
    MEDIA_TYPES: Frozenset of all standard types

Example:
    >>> from tmdb_api.types.media import MOVIE
    >>> item.media_type == MOVIE
"""

MOVIE = "movie"
TV = "tv"
PERSON = "person"

MEDIA_TYPES = frozenset({MOVIE, TV, PERSON})
