"""
Metrics collection for the event filter.

Records service lifecycle (starts, start failures, toggles) and channel
traffic (events suppressed or delivered). Exports over OTLP gRPC, or to the
console for debugging.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from opentelemetry import metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource

logger = logging.getLogger(__name__)


@dataclass
class MetricDefinition:
    name: str
    description: str
    unit: str


class FilterMetricsRegistry:
    """All metrics emitted by the event filter."""

    FILTER_STARTS = MetricDefinition(
        name="filter.starts",
        description="Number of successful filtering service starts",
        unit="1",
    )

    FILTER_START_FAILURES = MetricDefinition(
        name="filter.start_failures",
        description="Number of failed filtering service starts",
        unit="1",
    )

    FILTER_TOGGLES = MetricDefinition(
        name="filter.toggles",
        description="Number of effective filter flag changes",
        unit="1",
    )

    EVENTS_SUPPRESSED = MetricDefinition(
        name="filter.events_suppressed",
        description="Events dropped by the filter",
        unit="1",
    )

    EVENTS_DELIVERED = MetricDefinition(
        name="filter.events_delivered",
        description="Events that passed the filter",
        unit="1",
    )

    ERROR_COUNT = MetricDefinition(
        name="error.count",
        description="Number of errors encountered",
        unit="1",
    )


class FilterMetricsCollector:
    """
    Records event filter metrics on an OpenTelemetry meter.

    A collector can be built around any meter (tests pass one from an
    in-memory provider); ``initialize`` builds the process-wide one with
    exporters attached.
    """

    _instance: Optional["FilterMetricsCollector"] = None

    def __init__(self, meter: metrics.Meter):
        self._meter = meter
        self._instruments: Dict[str, Any] = {}
        self._setup_instruments()

    @classmethod
    def initialize(
        cls,
        service_name: str,
        service_version: str = "1.0.0",
        endpoint: Optional[str] = None,
        export_interval_ms: int = 60000,
        console_export: bool = False,
    ) -> Optional["FilterMetricsCollector"]:
        """
        Initialize the process-wide metrics collector.

        Args:
            service_name: Name of the service
            service_version: Version of the service
            endpoint: OTLP endpoint for metrics export
            export_interval_ms: Interval for exporting metrics (milliseconds)
            console_export: Enable console export for debugging

        Returns:
            The collector, or None when no exporter is configured
        """
        if cls._instance is not None:
            return cls._instance

        metric_readers: List[MetricReader] = []
        if console_export:
            metric_readers.append(
                PeriodicExportingMetricReader(
                    ConsoleMetricExporter(), export_interval_millis=export_interval_ms
                )
            )
        if endpoint:
            metric_readers.append(
                PeriodicExportingMetricReader(
                    OTLPMetricExporter(endpoint=endpoint, insecure=True),
                    export_interval_millis=export_interval_ms,
                )
            )

        if not metric_readers:
            logger.warning("No metric exporters configured")
            return None

        resource = Resource.create(
            {SERVICE_NAME: service_name, SERVICE_VERSION: service_version}
        )
        meter_provider = MeterProvider(resource=resource, metric_readers=metric_readers)
        metrics.set_meter_provider(meter_provider)

        cls._instance = cls(metrics.get_meter("eventfilter", version=service_version))
        logger.info(f"Metrics collector initialized for {service_name}")
        return cls._instance

    @classmethod
    def get_instance(cls) -> Optional["FilterMetricsCollector"]:
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def _setup_instruments(self) -> None:
        for attr_name in dir(FilterMetricsRegistry):
            metric_def = getattr(FilterMetricsRegistry, attr_name)
            if attr_name.startswith("_") or not isinstance(
                metric_def, MetricDefinition
            ):
                continue

            self._instruments[metric_def.name] = self._meter.create_counter(
                name=metric_def.name,
                description=metric_def.description,
                unit=metric_def.unit,
            )
            logger.debug(f"Created metric instrument: {metric_def.name}")

    def record_metric(
        self,
        metric_def: MetricDefinition,
        value: float,
        attributes: Optional[Dict[str, str]] = None,
    ) -> None:
        instrument = self._instruments.get(metric_def.name)
        if instrument is None:
            logger.debug(f"Instrument not found: {metric_def.name}")
            return

        instrument.add(value, attributes=attributes or {})

    def increment_starts(self, mechanism: str) -> None:
        self.record_metric(
            FilterMetricsRegistry.FILTER_STARTS, 1, {"filter.mechanism": mechanism}
        )

    def increment_start_failures(self, mechanism: str, error_type: str) -> None:
        self.record_metric(
            FilterMetricsRegistry.FILTER_START_FAILURES,
            1,
            {"filter.mechanism": mechanism, "error.type": error_type},
        )

    def increment_toggles(self, enabled: bool) -> None:
        self.record_metric(
            FilterMetricsRegistry.FILTER_TOGGLES,
            1,
            {"filter.enabled": str(enabled).lower()},
        )

    def increment_events_suppressed(self, event_type: str) -> None:
        self.record_metric(
            FilterMetricsRegistry.EVENTS_SUPPRESSED, 1, {"event.type": event_type}
        )

    def increment_events_delivered(self, event_type: str) -> None:
        self.record_metric(
            FilterMetricsRegistry.EVENTS_DELIVERED, 1, {"event.type": event_type}
        )

    def increment_error_count(self, error_type: str, component: str) -> None:
        self.record_metric(
            FilterMetricsRegistry.ERROR_COUNT,
            1,
            {"error.type": error_type, "component": component},
        )


def initialize_metrics(
    service_name: str,
    endpoint: Optional[str] = None,
    console_export: bool = False,
    export_interval_ms: int = 60000,
) -> Optional[FilterMetricsCollector]:
    """
    Initialize metrics collection.

    Example:
        >>> from eventfilter.otel.metrics import initialize_metrics
        >>> collector = initialize_metrics(
        ...     service_name="event-filter",
        ...     endpoint="http://localhost:4317"
        ... )
    """
    return FilterMetricsCollector.initialize(
        service_name=service_name,
        endpoint=endpoint,
        console_export=console_export,
        export_interval_ms=export_interval_ms,
    )


__all__ = [
    "MetricDefinition",
    "FilterMetricsRegistry",
    "FilterMetricsCollector",
    "initialize_metrics",
]
