"""
Axiom Metrics

In-process metrics for monitoring audit quality and throughput.
"""

import time
from collections import defaultdict
from threading import Lock
from typing import Any


def _labels_key(labels: dict[str, str] | None) -> str:
    """Generate key from labels."""
    if not labels:
        return ""
    return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))


class Counter:
    """
    Monotonically increasing counter.

    Usage:
        counter = Counter("validations_total", "Analyses validated")
        counter.inc()
        counter.inc(labels={"outcome": "empty"})
    """

    def __init__(self, name: str, description: str = "") -> None:
        self.name = name
        self.description = description
        self._values: dict[str, float] = defaultdict(float)
        self._lock = Lock()

    def inc(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        """Increment counter."""
        key = _labels_key(labels)
        with self._lock:
            self._values[key] += value

    def get(self, labels: dict[str, str] | None = None) -> float:
        """Get current value."""
        key = _labels_key(labels)
        with self._lock:
            return self._values.get(key, 0.0)

    def total(self) -> float:
        """Sum across every label combination."""
        with self._lock:
            return sum(self._values.values())

    def values(self) -> dict[str, float]:
        """Get all values."""
        with self._lock:
            return dict(self._values)


class Histogram:
    """
    Distribution of values (latencies, sizes, etc.).

    Usage:
        hist = Histogram("llm_latency_seconds", "LLM latency")
        with hist.time():
            call_llm()
    """

    DEFAULT_BUCKETS = (0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, float("inf"))

    def __init__(
        self, name: str, description: str = "", buckets: tuple[float, ...] | None = None
    ) -> None:
        self.name = name
        self.description = description
        self._buckets = buckets or self.DEFAULT_BUCKETS
        self._bucket_counts: dict[str, dict[float, int]] = defaultdict(
            lambda: {b: 0 for b in self._buckets}
        )
        self._sums: dict[str, float] = defaultdict(float)
        self._counts: dict[str, int] = defaultdict(int)
        self._lock = Lock()

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        """Record an observation."""
        key = _labels_key(labels)
        with self._lock:
            self._sums[key] += value
            self._counts[key] += 1
            for bucket in self._buckets:
                if value <= bucket:
                    self._bucket_counts[key][bucket] += 1

    def time(self, labels: dict[str, str] | None = None) -> "_HistogramTimer":
        """Context manager for timing operations."""
        return _HistogramTimer(self, labels)

    def get_count(self, labels: dict[str, str] | None = None) -> int:
        key = _labels_key(labels)
        with self._lock:
            return self._counts.get(key, 0)

    def get_sum(self, labels: dict[str, str] | None = None) -> float:
        key = _labels_key(labels)
        with self._lock:
            return self._sums.get(key, 0.0)

    def get_mean(self, labels: dict[str, str] | None = None) -> float:
        key = _labels_key(labels)
        with self._lock:
            count = self._counts.get(key, 0)
            if count == 0:
                return 0.0
            return self._sums[key] / count


class _HistogramTimer:
    """Context manager for timing with histogram."""

    def __init__(self, histogram: Histogram, labels: dict[str, str] | None) -> None:
        self._histogram = histogram
        self._labels = labels
        self._start: float | None = None

    def __enter__(self) -> "_HistogramTimer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        if self._start is not None:
            self._histogram.observe(time.perf_counter() - self._start, self._labels)


class MetricsRegistry:
    """
    Registry for all metrics.

    Usage:
        registry = MetricsRegistry()
        counter = registry.counter("validations_total", "Analyses validated")
        hist = registry.histogram("llm_latency_seconds", "LLM latency")
    """

    def __init__(self) -> None:
        self._metrics: dict[str, Counter | Histogram] = {}
        self._lock = Lock()

    def counter(self, name: str, description: str = "") -> Counter:
        """Get or create counter."""
        with self._lock:
            if name not in self._metrics:
                self._metrics[name] = Counter(name, description)
            return self._metrics[name]  # type: ignore[return-value]

    def histogram(
        self, name: str, description: str = "", buckets: tuple[float, ...] | None = None
    ) -> Histogram:
        """Get or create histogram."""
        with self._lock:
            if name not in self._metrics:
                self._metrics[name] = Histogram(name, description, buckets)
            return self._metrics[name]  # type: ignore[return-value]

    def get_all(self) -> dict[str, Any]:
        """Get all metric values."""
        result: dict[str, Any] = {}
        with self._lock:
            for name, metric in self._metrics.items():
                if isinstance(metric, Counter):
                    result[name] = metric.values()
                else:
                    result[name] = {
                        "count": metric.get_count(),
                        "sum": metric.get_sum(),
                        "mean": metric.get_mean(),
                    }
        return result


# Global metrics registry
_registry: MetricsRegistry | None = None


def get_registry() -> MetricsRegistry:
    """Get global metrics registry."""
    global _registry
    if _registry is None:
        _registry = MetricsRegistry()
    return _registry


def reset_metrics() -> None:
    """Reset global metrics."""
    global _registry
    _registry = None


class AxiomMetrics:
    """Pre-defined Axiom metrics."""

    def __init__(self, registry: MetricsRegistry | None = None) -> None:
        self._registry = registry or get_registry()

    @property
    def validations(self) -> Counter:
        """Analyses validated, labelled by outcome (ok / empty)."""
        return self._registry.counter("axiom_validations_total", "Analyses validated")

    @property
    def scores_capped(self) -> Counter:
        """Readiness scores lowered by the critical-issue cap."""
        return self._registry.counter("axiom_scores_capped_total", "Readiness scores capped")

    @property
    def actions_synthesized(self) -> Counter:
        """High-priority action items added for uncovered critical issues."""
        return self._registry.counter(
            "axiom_actions_synthesized_total", "Coverage action items synthesized"
        )

    @property
    def rigor_warnings(self) -> Counter:
        """Rigor warnings raised on audit output."""
        return self._registry.counter("axiom_rigor_warnings_total", "Rigor warnings")

    @property
    def detections(self) -> Counter:
        """Paper-type detections, labelled by type and confidence."""
        return self._registry.counter("axiom_detections_total", "Paper-type detections")

    @property
    def audits(self) -> Counter:
        """Audits run, labelled by status."""
        return self._registry.counter("axiom_audits_total", "Audits run")

    @property
    def llm_latency(self) -> Histogram:
        """LLM request latency."""
        return self._registry.histogram("axiom_llm_latency_seconds", "LLM latency")

    @property
    def rate_limited(self) -> Counter:
        """Requests rejected by the rate limiter."""
        return self._registry.counter("axiom_rate_limited_total", "Rate-limited requests")


def get_axiom_metrics() -> AxiomMetrics:
    """Get Axiom metrics instance."""
    return AxiomMetrics()
