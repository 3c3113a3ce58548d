# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the TMDb API client.

Classes:
    MetricsCollector: Thread-safe collector with Prometheus export.
    MetricDefinition: Schema of a predefined metric.

Functions:
    get_metrics_collector: Get the process-wide collector.
    reset_metrics_collector: Reset the process-wide collector.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    ADMISSION_CANCELLATIONS_TOTAL,
    ADMISSION_QUEUE_DEPTH,
    ADMISSION_WAIT_SECONDS,
    ADMISSIONS_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    REQUEST_DURATION_SECONDS,
    REQUESTS_FAILED_TOTAL,
    REQUESTS_IN_FLIGHT,
    REQUESTS_TOTAL,
)

__all__ = [
    "ADMISSIONS_TOTAL",
    "ADMISSION_CANCELLATIONS_TOTAL",
    "ADMISSION_QUEUE_DEPTH",
    "ADMISSION_WAIT_SECONDS",
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "REQUESTS_FAILED_TOTAL",
    "REQUESTS_IN_FLIGHT",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "MetricDefinition",
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
