"""
Unit tests for the OpenTelemetry metrics collector.
"""

import unittest
from unittest.mock import patch

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from eventfilter.channel import Event, EventChannel
from eventfilter.mechanisms import ChannelFilteringMechanism
from eventfilter.otel.metrics import FilterMetricsCollector, initialize_metrics
from eventfilter.service import EventFilterService


class TestFilterMetricsCollector(unittest.TestCase):
    """Tests for counters recorded by the service and channel."""

    def setUp(self):
        self.reader = InMemoryMetricReader()
        provider = MeterProvider(metric_readers=[self.reader])
        self.addCleanup(provider.shutdown)
        self.collector = FilterMetricsCollector(provider.get_meter("tests"))

    def collected(self):
        totals = {}
        data = self.reader.get_metrics_data()
        for resource_metrics in data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    totals[metric.name] = sum(
                        point.value for point in metric.data.data_points
                    )
        return totals

    def test_service_and_channel_metrics(self):
        """Test starts, flag pushes and channel traffic are counted."""
        channel = EventChannel(metrics=self.collector)
        service = EventFilterService(
            ChannelFilteringMechanism(channel), metrics=self.collector
        )

        service.start()
        service.set_enabled(True)
        channel.enqueue(Event.create("event", "tests"))
        channel.enqueue(Event.create("log", "tests"))
        channel.enqueue(Event.create("log", "tests"))

        totals = self.collected()
        self.assertEqual(totals["filter.starts"], 1)
        self.assertEqual(totals["filter.toggles"], 2)
        self.assertEqual(totals["filter.events_suppressed"], 1)
        self.assertEqual(totals["filter.events_delivered"], 2)

    def test_error_count(self):
        """Test errors are counted."""
        self.collector.increment_error_count("ValueError", "service")
        self.assertEqual(self.collected()["error.count"], 1)


class TestInitializeMetrics(unittest.TestCase):
    """Tests for the process-wide collector."""

    def setUp(self):
        FilterMetricsCollector.reset()
        self.addCleanup(FilterMetricsCollector.reset)

    def test_without_exporters_returns_none(self):
        """Test no collector is built without exporters."""
        self.assertIsNone(initialize_metrics("tests"))
        self.assertIsNone(FilterMetricsCollector.get_instance())

    @patch("eventfilter.otel.metrics.metrics.set_meter_provider")
    def test_console_export_builds_singleton(self, mock_set_provider):
        """Test console export builds a single shared collector."""
        collector = initialize_metrics("tests", console_export=True)
        self.assertIsNotNone(collector)
        self.assertIs(initialize_metrics("tests", console_export=True), collector)
        mock_set_provider.assert_called_once()
