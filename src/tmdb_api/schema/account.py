# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Account payloads (v3 account endpoints)."""

from pydantic import BaseModel


class AccountDetails(BaseModel):
    id: int
    username: str | None = None
    name: str | None = None
    iso_639_1: str | None = None
    iso_3166_1: str | None = None
    include_adult: bool = False


class FavoriteRequest(BaseModel):
    """Body of ``POST /3/account/{account_id}/favorite``."""

    media_type: str
    media_id: int
    favorite: bool = True
