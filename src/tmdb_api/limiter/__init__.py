# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Admission control for outbound calls.

This module keeps every client that shares a gate under one rate limit,
however many coroutines call it at once. Admission is first come, first
served; once admitted, calls run concurrently.

Exports:
    WindowTracker: Non-blocking sliding-window and in-flight accounting
    AdmissionGate: Blocking FIFO admission on top of a WindowTracker
    AdmissionTicket: Proof of admission, released exactly once
"""

from .gate import AdmissionGate
from .ticket import AdmissionTicket
from .window import WindowTracker

__all__ = ["AdmissionGate", "AdmissionTicket", "WindowTracker"]
