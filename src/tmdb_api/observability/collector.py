# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics collector with Prometheus export and dict snapshots.

Usage:
    >>> from tmdb_api.observability.collector import get_metrics_collector
    >>> collector = get_metrics_collector()
    >>> collector.inc_counter('tmdb_api_requests_total',
    ...                       labels={'method': 'GET', 'outcome': 'success'})
    >>> metrics = collector.get_metrics()

Thread Safety:
    All operations are thread-safe. Uses RLock for reentrant locking.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from .constants import (
    ADMISSION_CANCELLATIONS_TOTAL,
    ADMISSION_QUEUE_DEPTH,
    ADMISSION_WAIT_SECONDS,
    ADMISSIONS_TOTAL,
    LATENCY_BUCKETS,
    REQUEST_DURATION_SECONDS,
    REQUESTS_FAILED_TOTAL,
    REQUESTS_IN_FLIGHT,
    REQUESTS_TOTAL,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricDefinition:
    """Schema of a metric: type, description, labels and histogram buckets."""

    name: str
    metric_type: str  # 'counter', 'gauge', 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: tuple[float, ...] | None = None


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    REQUESTS_TOTAL: MetricDefinition(
        REQUESTS_TOTAL, "counter", "Total calls completed", ("method", "outcome")
    ),
    REQUESTS_FAILED_TOTAL: MetricDefinition(
        REQUESTS_FAILED_TOTAL, "counter", "Total failed calls", ("method", "reason")
    ),
    REQUEST_DURATION_SECONDS: MetricDefinition(
        REQUEST_DURATION_SECONDS,
        "histogram",
        "Transport duration of admitted calls",
        ("method",),
        buckets=tuple(LATENCY_BUCKETS),
    ),
    ADMISSIONS_TOTAL: MetricDefinition(
        ADMISSIONS_TOTAL, "counter", "Total tickets issued", ("gate",)
    ),
    ADMISSION_CANCELLATIONS_TOTAL: MetricDefinition(
        ADMISSION_CANCELLATIONS_TOTAL,
        "counter",
        "Total callers cancelled while waiting for admission",
        ("gate",),
    ),
    ADMISSION_WAIT_SECONDS: MetricDefinition(
        ADMISSION_WAIT_SECONDS,
        "histogram",
        "Time spent waiting for admission",
        ("gate",),
        buckets=tuple(LATENCY_BUCKETS),
    ),
    REQUESTS_IN_FLIGHT: MetricDefinition(
        REQUESTS_IN_FLIGHT, "gauge", "Admitted calls not yet released", ("gate",)
    ),
    ADMISSION_QUEUE_DEPTH: MetricDefinition(
        ADMISSION_QUEUE_DEPTH, "gauge", "Callers waiting for admission", ("gate",)
    ),
}


class MetricsCollector:
    """
    Metrics collector keeping dict snapshots and mirroring to Prometheus.

    Cardinality Protection:
        At most MAX_LABEL_COMBINATIONS unique label combinations are
        tracked per metric; further combinations are dropped with a warning.

    Example:
        >>> collector = MetricsCollector(registry=CollectorRegistry())
        >>> collector.inc_counter(REQUESTS_TOTAL, labels={'method': 'GET', 'outcome': 'success'})
        >>> collector.get_metrics()["counters"][REQUESTS_TOTAL]
        {'method=GET,outcome=success': 1}
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Whether to mirror metrics to Prometheus
            registry: Prometheus registry (defaults to the global registry)
        """
        self._enable_prometheus = enable_prometheus
        self._registry = registry if registry is not None else REGISTRY

        self._counters: dict[str, dict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._gauges: dict[str, dict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._histograms: dict[str, dict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._label_combinations: dict[str, set[str]] = defaultdict(set)
        self._prom_metrics: dict[str, Any] = {}

        self._lock = threading.RLock()

        logger.debug(
            "MetricsCollector initialized (prometheus=%s)",
            "enabled" if enable_prometheus else "disabled",
        )

    def _labels_to_key(self, labels: dict[str, str] | None) -> str:
        if not labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))

    def _check_cardinality(self, name: str, label_key: str) -> bool:
        seen = self._label_combinations[name]
        if label_key in seen:
            return True
        if len(seen) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                "Cardinality limit (%d) reached for metric %s. Dropping label combination: %s",
                self.MAX_LABEL_COMBINATIONS,
                name,
                label_key,
            )
            return False
        seen.add(label_key)
        return True

    def _prom_metric(self, name: str, labels: dict[str, str] | None) -> Any | None:
        """Return the Prometheus child for name/labels, creating the metric on first use."""
        if not self._enable_prometheus:
            return None

        # A stored None marks a metric that could not be created.
        if name in self._prom_metrics:
            metric = self._prom_metrics[name]
        else:
            defn = METRIC_DEFINITIONS.get(name)
            if defn is None:
                logger.debug("No definition for metric %s; skipping Prometheus", name)
                self._prom_metrics[name] = None
                return None
            try:
                if defn.metric_type == "counter":
                    metric = Counter(
                        name, defn.description, defn.label_names, registry=self._registry
                    )
                elif defn.metric_type == "gauge":
                    metric = Gauge(
                        name, defn.description, defn.label_names, registry=self._registry
                    )
                else:
                    metric = Histogram(
                        name,
                        defn.description,
                        defn.label_names,
                        buckets=defn.buckets or tuple(LATENCY_BUCKETS),
                        registry=self._registry,
                    )
            except ValueError as e:
                # Duplicate registration in a shared registry
                logger.warning("Failed to create Prometheus metric %s: %s", name, e)
                self._prom_metrics[name] = None
                return None
            self._prom_metrics[name] = metric

        if metric is None:
            return None
        return metric.labels(**labels) if labels else metric

    # === Counter Operations ===

    def inc_counter(
        self, name: str, value: float = 1, labels: dict[str, str] | None = None
    ) -> None:
        """Increment a counter.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._counters[name][label_key] += value
            prom = self._prom_metric(name, labels)
        if prom is not None:
            prom.inc(value)

    # === Gauge Operations ===

    def set_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] = value
            prom = self._prom_metric(name, labels)
        if prom is not None:
            prom.set(value)

    # === Histogram Operations ===

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            observations = self._histograms[name][label_key]
            observations.append(value)
            # Keep only recent observations
            if len(observations) > 10000:
                del observations[:5000]
            prom = self._prom_metric(name, labels)
        if prom is not None:
            prom.observe(value)

    # === Snapshot Operations ===

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a snapshot of all metrics.

        Returns a dict suitable for JSON serialization:
        {
            "counters": {"metric_name": {"label_key": value, ...}, ...},
            "gauges": {"metric_name": {"label_key": value, ...}, ...},
            "histograms": {"metric_name": {"label_key": {count, sum, avg, min, max}}}
        }
        """
        with self._lock:
            counters = {name: dict(values) for name, values in self._counters.items()}
            gauges = {name: dict(values) for name, values in self._gauges.items()}
            histograms: dict[str, dict[str, dict[str, float]]] = {}
            for name, label_values in self._histograms.items():
                histograms[name] = {
                    label_key: {
                        "count": len(obs),
                        "sum": sum(obs),
                        "avg": sum(obs) / len(obs),
                        "min": min(obs),
                        "max": max(obs),
                    }
                    for label_key, obs in label_values.items()
                    if obs
                }

        return {"counters": counters, "gauges": gauges, "histograms": histograms}

    def reset(self) -> None:
        """Reset the dict snapshots. Prometheus metrics keep their values."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._histograms.clear()
            self._label_combinations.clear()

        logger.debug("Metrics collector reset")

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus


# =============================================================================
# Singleton Pattern
# =============================================================================

_global_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector(enable_prometheus: bool = True) -> MetricsCollector:
    """
    Get or create the process-wide metrics collector.

    Args:
        enable_prometheus: Whether to mirror to Prometheus (only used on first call)
    """
    global _global_collector

    if _global_collector is None:
        with _collector_lock:
            if _global_collector is None:
                _global_collector = MetricsCollector(
                    enable_prometheus=enable_prometheus
                )

    return _global_collector


def reset_metrics_collector() -> None:
    """
    Reset the process-wide collector (mainly for testing).

    Warning:
        This is primarily for testing. A collector created afterwards cannot
        re-register metric names already present in the global Prometheus
        registry; those are logged and skipped.
    """
    global _global_collector
    with _collector_lock:
        if _global_collector:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
