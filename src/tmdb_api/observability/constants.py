# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `tmdb_api_` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    Use only categorical labels:
    - `method` - HTTP verb (GET, POST, PUT, DELETE)
    - `outcome` - success or failure
    - `reason` - ErrorKind value
    - `gate` - RateLimitConfig.name of the admission gate

    NEVER use endpoint paths with ids, query strings or tokens as labels.
"""

METRIC_PREFIX = "tmdb_api"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Request Metrics (client.py)
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total calls completed, by method and outcome."""

REQUESTS_FAILED_TOTAL = f"{METRIC_PREFIX}_requests_failed_total"
"""Total failed calls, by method and reason."""

REQUEST_DURATION_SECONDS = f"{METRIC_PREFIX}_request_duration_seconds"
"""Time spent in transport for admitted calls."""


# =============================================================================
# Admission Metrics (limiter/gate.py)
# =============================================================================

ADMISSIONS_TOTAL = f"{METRIC_PREFIX}_admissions_total"
"""Total tickets issued by the admission gate."""

ADMISSION_WAIT_SECONDS = f"{METRIC_PREFIX}_admission_wait_seconds"
"""Time callers spent waiting for admission."""

ADMISSION_CANCELLATIONS_TOTAL = f"{METRIC_PREFIX}_admission_cancellations_total"
"""Total callers cancelled while queued for admission."""

REQUESTS_IN_FLIGHT = f"{METRIC_PREFIX}_requests_in_flight"
"""Number of admitted calls not yet released."""

ADMISSION_QUEUE_DEPTH = f"{METRIC_PREFIX}_admission_queue_depth"
"""Number of callers waiting for admission."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
]
"""Buckets for request duration and admission wait histograms."""


__all__ = [
    "ADMISSIONS_TOTAL",
    "ADMISSION_CANCELLATIONS_TOTAL",
    "ADMISSION_QUEUE_DEPTH",
    "ADMISSION_WAIT_SECONDS",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "REQUESTS_FAILED_TOTAL",
    "REQUESTS_IN_FLIGHT",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
]
