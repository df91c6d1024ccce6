"""
Monitoring for logger metrics

Example:
    from loggical import Logger, LoggerOptions
    from loggical.monitoring import MetricsCollector

    metrics = MetricsCollector()
    logger = Logger(LoggerOptions(metrics=metrics))
    logger.info("ready")
    print(metrics.get_metrics().to_dict())
"""

from loggical.monitoring.metrics import LoggerMetrics, MetricsCollector
from loggical.monitoring.monitor import InMemoryMonitor, Monitor, NullMonitor
from loggical.monitoring.prometheus_monitor import HAS_PROMETHEUS, PrometheusMonitor

__all__ = [
    "LoggerMetrics",
    "MetricsCollector",
    "Monitor",
    "NullMonitor",
    "InMemoryMonitor",
    "PrometheusMonitor",
    "HAS_PROMETHEUS",
]
