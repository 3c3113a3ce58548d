# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Paged result list used by search, trending and discover endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResultsPage(BaseModel, Generic[T]):
    page: int = 1
    results: list[T] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0
