# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""AdmissionGate: first-come-first-served blocking admission on top of WindowTracker."""

import asyncio
import contextlib
import logging
import time
from collections import deque
from collections.abc import AsyncIterator

from ..config import RateLimitConfig
from ..observability.collector import MetricsCollector
from ..observability.constants import (
    ADMISSION_CANCELLATIONS_TOTAL,
    ADMISSION_QUEUE_DEPTH,
    ADMISSION_WAIT_SECONDS,
    ADMISSIONS_TOTAL,
    REQUESTS_IN_FLIGHT,
)
from .ticket import AdmissionTicket
from .window import WindowTracker

logger = logging.getLogger(__name__)


class AdmissionGate:
    """
    Suspends callers until the WindowTracker admits them, in arrival order.

    Waiters queue in a deque, each with its own asyncio.Event. Only the head
    of the queue probes the tracker; everyone behind it sleeps until it is
    their turn. A newcomer takes the fast path only when nobody is queued,
    so no caller can overtake one that is already waiting.

    The head wakes up when:
    - a ticket is released (``release`` sets the head's event), or
    - the oldest admission leaves the window (timed wait), or
    - the previous head was admitted or cancelled.

    The gate belongs to one event loop. Share one instance between clients
    to make them draw from the same limit. Admission metrics carry a
    ``gate`` label taken from ``RateLimitConfig.name``; give independent
    gates distinct names when they report to the same collector.

    Example:
        >>> gate = AdmissionGate(WindowTracker(RateLimitConfig(max_in_flight=2)))
        >>> async with gate.admit() as ticket:
        ...     await send_request()
    """

    def __init__(
        self,
        tracker: WindowTracker | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the AdmissionGate.

        Args:
            tracker: Window tracker to admit against (default: WindowTracker())
            metrics: Optional collector for admission metrics
        """
        self._tracker = tracker or WindowTracker()
        self._metrics = metrics
        self._labels = {"gate": self._tracker.config.name}
        self._waiters: deque[asyncio.Event] = deque()

    @classmethod
    def from_config(
        cls, config: RateLimitConfig, metrics: MetricsCollector | None = None
    ) -> "AdmissionGate":
        return cls(WindowTracker(config), metrics=metrics)

    @property
    def tracker(self) -> WindowTracker:
        return self._tracker

    @property
    def waiting(self) -> int:
        """Number of callers queued for admission."""
        return len(self._waiters)

    @property
    def in_flight(self) -> int:
        return self._tracker.in_flight

    async def acquire(self) -> AdmissionTicket:
        """
        Wait for admission and return the ticket.

        The caller owns the ticket and must pass it to ``release`` exactly
        once. Prefer ``admit()``, which does that unconditionally.

        Raises:
            asyncio.CancelledError: If cancelled while queued; no slot is taken
        """
        started = time.monotonic()

        if not self._waiters:
            ticket = self._tracker.try_admit()
            if ticket is not None:
                self._record_admission(started)
                return ticket

        waiter = asyncio.Event()
        self._waiters.append(waiter)
        self._record_queue_depth()

        try:
            while True:
                if self._waiters[0] is waiter:
                    ticket = self._tracker.try_admit()
                    if ticket is not None:
                        self._waiters.popleft()
                        self._notify_head()
                        self._record_queue_depth()
                        self._record_admission(started)
                        return ticket
                    delay = self._tracker.seconds_until_available()
                else:
                    delay = None

                waiter.clear()
                if delay is None:
                    await waiter.wait()
                else:
                    # Wake through the same event once the window frees up.
                    handle = asyncio.get_running_loop().call_later(delay, waiter.set)
                    try:
                        await waiter.wait()
                    finally:
                        handle.cancel()
        except asyncio.CancelledError:
            was_head = self._waiters[0] is waiter
            self._waiters.remove(waiter)
            if was_head:
                self._notify_head()
            self._record_queue_depth()
            if self._metrics is not None:
                self._metrics.inc_counter(
                    ADMISSION_CANCELLATIONS_TOTAL, labels=self._labels
                )
            logger.debug("Admission wait cancelled (%d still waiting)", len(self._waiters))
            raise

    def release(self, ticket: AdmissionTicket) -> None:
        """
        Release a ticket and wake the next waiter.

        Raises:
            AdmissionError: If the ticket is unknown or already released
        """
        self._tracker.release(ticket)
        self._notify_head()
        if self._metrics is not None:
            self._metrics.set_gauge(
                REQUESTS_IN_FLIGHT, self._tracker.in_flight, labels=self._labels
            )

    @contextlib.asynccontextmanager
    async def admit(self) -> AsyncIterator[AdmissionTicket]:
        """Acquire a ticket for the body of the block and always release it."""
        ticket = await self.acquire()
        try:
            yield ticket
        finally:
            self.release(ticket)

    def _notify_head(self) -> None:
        if self._waiters:
            self._waiters[0].set()

    def _record_admission(self, started: float) -> None:
        if self._metrics is None:
            return
        self._metrics.inc_counter(ADMISSIONS_TOTAL, labels=self._labels)
        self._metrics.observe_histogram(
            ADMISSION_WAIT_SECONDS, time.monotonic() - started, labels=self._labels
        )
        self._metrics.set_gauge(
            REQUESTS_IN_FLIGHT, self._tracker.in_flight, labels=self._labels
        )

    def _record_queue_depth(self) -> None:
        if self._metrics is not None:
            self._metrics.set_gauge(
                ADMISSION_QUEUE_DEPTH, len(self._waiters), labels=self._labels
            )
