from .metrics import (
    FilterMetricsCollector,
    FilterMetricsRegistry,
    initialize_metrics,
)

__all__ = [
    "FilterMetricsCollector",
    "FilterMetricsRegistry",
    "initialize_metrics",
]
