"""
Axiom Observability Layer

In-process metrics.
"""

from axiom.observability.metrics import (
    AxiomMetrics,
    Counter,
    Histogram,
    MetricsRegistry,
    get_axiom_metrics,
    get_registry,
    reset_metrics,
)

__all__ = [
    "MetricsRegistry",
    "Counter",
    "Histogram",
    "AxiomMetrics",
    "get_registry",
    "get_axiom_metrics",
    "reset_metrics",
]
