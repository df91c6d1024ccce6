"""
Prometheus monitor implementation

Exports logger metrics in Prometheus format using the prometheus_client
library (install the "monitoring" extra).
"""

from __future__ import annotations
from typing import Dict, Optional

from loggical.monitoring.monitor import Monitor

# Optional dependency
try:
    from prometheus_client import Counter, Gauge, Histogram, REGISTRY
    HAS_PROMETHEUS = True
except ImportError:
    HAS_PROMETHEUS = False
    Counter = None
    Gauge = None
    Histogram = None
    REGISTRY = None


class PrometheusMonitor(Monitor):
    """
    Export logger metrics to Prometheus.

    Example:
        from loggical import Logger, LoggerOptions
        from loggical.monitoring import MetricsCollector, PrometheusMonitor

        monitor = PrometheusMonitor(prefix="myapp_logger")
        logger = Logger(LoggerOptions(metrics=MetricsCollector(monitor=monitor)))

        # Metrics available:
        # myapp_logger_messages_total{level="INFO"}
        # myapp_logger_suppressed_total{level="DEBUG"}
        # myapp_logger_dispatch_latency_seconds
        # myapp_logger_messages_per_second
    """

    def __init__(self, prefix: str = "loggical", registry=None):
        """
        Initialize Prometheus monitor.

        Args:
            prefix: Metric name prefix
            registry: Optional custom registry (uses default if None)

        Raises:
            ImportError: If prometheus_client is not installed
        """
        if not HAS_PROMETHEUS:
            raise ImportError(
                "prometheus_client not installed. "
                "Install with: pip install loggical[monitoring]"
            )

        self._prefix = prefix
        self._registry = registry or REGISTRY

        self._messages_total = Counter(
            f"{prefix}_messages_total",
            "Total emitted log messages",
            ["level"],
            registry=self._registry,
        )

        self._suppressed_total = Counter(
            f"{prefix}_suppressed_total",
            "Log calls dropped by the level gate",
            ["level"],
            registry=self._registry,
        )

        self._dispatch_latency = Histogram(
            f"{prefix}_dispatch_latency_seconds",
            "Time spent formatting and dispatching a log call",
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self._messages_rate = Gauge(
            f"{prefix}_messages_per_second",
            "Current message rate",
            registry=self._registry,
        )

    def record_counter(self, name: str, value: int, tags: Optional[Dict[str, str]] = None) -> None:
        """
        Record a counter metric.

        Args:
            name: "messages" or "suppressed"
            value: Counter increment
            tags: Labels, "level" is used
        """
        level = tags.get("level", "unknown") if tags else "unknown"
        if name == "messages":
            self._messages_total.labels(level=level).inc(value)
        elif name == "suppressed":
            self._suppressed_total.labels(level=level).inc(value)

    def record_gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        if name == "messages_per_second":
            self._messages_rate.set(value)

    def record_histogram(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        if name == "dispatch_latency":
            # Milliseconds in, seconds out
            self._dispatch_latency.observe(value / 1000.0)
