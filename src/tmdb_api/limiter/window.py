# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""WindowTracker: sliding-window admission counting with an in-flight cap."""

import itertools
import logging
import threading
import time
from collections import deque
from collections.abc import Callable

from ..config import RateLimitConfig
from ..exceptions import AdmissionError
from .ticket import AdmissionTicket

logger = logging.getLogger(__name__)


class WindowTracker:
    """
    Tracks recent admissions and outstanding tickets. No I/O, never blocks.

    Two limits apply together:
    - at most ``max_requests`` admissions in any trailing ``window_seconds``
    - at most ``max_in_flight`` tickets issued and not yet released

    State:
    - ``_admissions``: admission timestamps, oldest first, pruned lazily
    - ``_outstanding``: ids of tickets not yet released

    All public methods take ``_lock``, so ``try_admit`` and ``release`` are
    atomic with respect to each other even across threads.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the WindowTracker.

        Args:
            config: Admission limits (default: RateLimitConfig())
            clock: Monotonic clock returning seconds (injectable for tests)
        """
        self._config = config or RateLimitConfig()
        self._clock = clock

        self._admissions: deque[float] = deque()
        self._outstanding: set[int] = set()
        self._ids = itertools.count(1)

        self._lock = threading.Lock()

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    @property
    def capacity(self) -> int:
        """Maximum number of tickets outstanding at once."""
        return self._config.max_in_flight

    @property
    def in_flight(self) -> int:
        with self._lock:
            return len(self._outstanding)

    @property
    def admissions_in_window(self) -> int:
        with self._lock:
            self._prune_unlocked(self._clock())
            return len(self._admissions)

    def _prune_unlocked(self, now: float) -> None:
        cutoff = now - self._config.window_seconds
        while self._admissions and self._admissions[0] <= cutoff:
            self._admissions.popleft()

    def try_admit(self) -> AdmissionTicket | None:
        """
        Issue a ticket if both limits allow it.

        Returns:
            A fresh AdmissionTicket, or None when at capacity
        """
        with self._lock:
            now = self._clock()
            self._prune_unlocked(now)

            if len(self._outstanding) >= self._config.max_in_flight:
                return None
            if len(self._admissions) >= self._config.max_requests:
                return None

            ticket = AdmissionTicket(ticket_id=next(self._ids), admitted_at=now)
            self._admissions.append(now)
            self._outstanding.add(ticket.ticket_id)

            logger.debug(
                "Admitted ticket %d (in_flight=%d, window=%d)",
                ticket.ticket_id,
                len(self._outstanding),
                len(self._admissions),
            )
            return ticket

    def release(self, ticket: AdmissionTicket) -> None:
        """
        Return a ticket's in-flight slot.

        The admission itself stays in the window until it ages out.

        Raises:
            AdmissionError: If the ticket is unknown or already released
        """
        with self._lock:
            if ticket.ticket_id not in self._outstanding:
                raise AdmissionError(
                    f"Ticket {ticket.ticket_id} is not outstanding",
                    ticket_id=ticket.ticket_id,
                )
            self._outstanding.discard(ticket.ticket_id)

            logger.debug(
                "Released ticket %d (in_flight=%d)",
                ticket.ticket_id,
                len(self._outstanding),
            )

    def seconds_until_available(self) -> float | None:
        """
        How long until ``try_admit`` could succeed without any release.

        Returns:
            None when the in-flight cap is reached (only a release frees a
            slot), otherwise the seconds until the oldest admission leaves
            the window; 0.0 when an admission is possible now.
        """
        with self._lock:
            now = self._clock()
            self._prune_unlocked(now)

            if len(self._outstanding) >= self._config.max_in_flight:
                return None
            if len(self._admissions) < self._config.max_requests:
                return 0.0
            oldest = self._admissions[0]
            return max(0.0, oldest + self._config.window_seconds - now)
