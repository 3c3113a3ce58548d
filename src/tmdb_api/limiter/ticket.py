# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""AdmissionTicket dataclass for tracking one admitted call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdmissionTicket:
    """
    Proof of admission for a single request attempt.

    A ticket is owned by exactly one call, is never shared or reused, and
    must be released exactly once when that call completes or fails.

    Attributes:
        ticket_id: Identifier unique within the issuing tracker
        admitted_at: Tracker clock reading when the ticket was issued
    """

    ticket_id: int
    admitted_at: float
