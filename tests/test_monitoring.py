"""Tests for monitoring module"""

import pytest
from datetime import datetime
from unittest.mock import Mock

from loggical import LogLevel
from loggical.monitoring import (
    InMemoryMonitor,
    LoggerMetrics,
    MetricsCollector,
    NullMonitor,
    PrometheusMonitor,
)


class TestLoggerMetrics:
    """Test LoggerMetrics dataclass."""

    def test_default_values(self):
        metrics = LoggerMetrics()
        assert metrics.total_messages == 0
        assert metrics.suppressed_messages == 0
        assert metrics.messages_per_second == 0.0
        assert metrics.started_at is None

    def test_to_dict(self):
        metrics = LoggerMetrics(
            total_messages=100,
            suppressed_messages=5,
            messages_by_level={LogLevel.INFO: 80, LogLevel.ERROR: 20},
            started_at=datetime(2024, 1, 2, 3, 4, 5),
        )
        data = metrics.to_dict()
        assert data["total_messages"] == 100
        assert data["suppressed_messages"] == 5
        assert data["messages_by_level"] == {"INFO": 80, "ERROR": 20}
        assert data["started_at"] == "2024-01-02T03:04:05"
        assert data["last_message_at"] is None


class TestMetricsCollector:
    """Test MetricsCollector class."""

    def test_record_message(self):
        collector = MetricsCollector()
        collector.record_message(LogLevel.INFO, latency_ms=1.5)
        collector.record_message(LogLevel.ERROR, latency_ms=2.0)

        metrics = collector.get_metrics()
        assert metrics.total_messages == 2
        assert metrics.messages_by_level[LogLevel.INFO] == 1
        assert metrics.messages_by_level[LogLevel.ERROR] == 1
        assert metrics.last_message_at is not None

    def test_record_suppressed(self):
        collector = MetricsCollector()
        collector.record_suppressed(LogLevel.DEBUG)
        collector.record_suppressed(LogLevel.DEBUG)
        assert collector.get_metrics().suppressed_messages == 2

    def test_latency(self):
        collector = MetricsCollector()
        for latency in (1.0, 2.0, 3.0):
            collector.record_message(LogLevel.INFO, latency_ms=latency)

        metrics = collector.get_metrics()
        assert metrics.avg_dispatch_latency_ms == pytest.approx(2.0)
        assert metrics.max_dispatch_latency_ms == 3.0
        assert metrics.p99_dispatch_latency_ms == 3.0

    def test_no_latency_samples(self):
        collector = MetricsCollector()
        collector.record_message(LogLevel.INFO)
        assert collector.get_metrics().avg_dispatch_latency_ms == 0.0

    def test_snapshot_is_copy(self):
        collector = MetricsCollector()
        snapshot = collector.get_metrics()
        collector.record_message(LogLevel.INFO)
        assert snapshot.total_messages == 0

    def test_reset(self):
        collector = MetricsCollector()
        collector.record_message(LogLevel.INFO, latency_ms=1.0)
        collector.record_suppressed(LogLevel.DEBUG)
        collector.reset()

        metrics = collector.get_metrics()
        assert metrics.total_messages == 0
        assert metrics.suppressed_messages == 0
        assert metrics.max_dispatch_latency_ms == 0.0


class TestMonitors:
    """Test monitor backends."""

    def test_in_memory_monitor(self):
        monitor = InMemoryMonitor()
        collector = MetricsCollector(monitor=monitor)
        collector.record_message(LogLevel.INFO, latency_ms=1.5)
        collector.record_message(LogLevel.INFO)
        collector.record_suppressed(LogLevel.DEBUG)

        assert monitor.get_counter("messages", {"level": "INFO"}) == 2
        assert monitor.get_counter("suppressed", {"level": "DEBUG"}) == 1
        assert monitor.get_histogram("dispatch_latency") == [1.5]
        assert monitor.get_gauge("messages_per_second") is not None

    def test_in_memory_reset(self):
        monitor = InMemoryMonitor()
        monitor.record_counter("messages", 1)
        monitor.reset()
        assert monitor.get_counter("messages") == 0

    def test_monitor_calls(self):
        monitor = Mock()
        collector = MetricsCollector(monitor=monitor)
        collector.record_message(LogLevel.WARN, latency_ms=3.0)
        monitor.record_counter.assert_called_once_with("messages", 1, {"level": "WARN"})
        monitor.record_histogram.assert_called_once_with("dispatch_latency", 3.0)

    def test_null_monitor(self):
        collector = MetricsCollector(monitor=NullMonitor())
        collector.record_message(LogLevel.INFO, latency_ms=1.0)
        assert collector.get_metrics().total_messages == 1


class TestPrometheusMonitor:
    """Test the Prometheus exporter."""

    def test_exports_metrics(self):
        prometheus_client = pytest.importorskip("prometheus_client")
        registry = prometheus_client.CollectorRegistry()
        monitor = PrometheusMonitor(prefix="test_logger", registry=registry)

        collector = MetricsCollector(monitor=monitor)
        collector.record_message(LogLevel.INFO, latency_ms=2.0)
        collector.record_suppressed(LogLevel.DEBUG)

        assert registry.get_sample_value(
            "test_logger_messages_total", {"level": "INFO"}
        ) == 1.0
        assert registry.get_sample_value(
            "test_logger_suppressed_total", {"level": "DEBUG"}
        ) == 1.0
        assert registry.get_sample_value("test_logger_dispatch_latency_seconds_count") == 1.0
