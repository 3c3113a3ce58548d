# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""TMDb status payload, returned by write calls and by every error response."""

from pydantic import BaseModel


class StatusSchema(BaseModel):
    """
    ``{"status_code": 34, "status_message": "...", "success": false}``

    ``success`` is only present on some write endpoints.
    """

    status_code: int
    status_message: str
    success: bool | None = None
