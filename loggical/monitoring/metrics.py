"""
Logger metrics collection and aggregation
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple
import threading
import time

from loggical.core.log_level import LogLevel


@dataclass
class LoggerMetrics:
    """
    Metrics collected by a logger.

    Counts of emitted and suppressed messages, message rate and the time
    spent formatting and dispatching a call.
    """

    # Message counts
    total_messages: int = 0
    messages_by_level: Dict[LogLevel, int] = field(default_factory=dict)
    suppressed_messages: int = 0

    # Performance metrics
    messages_per_second: float = 0.0
    avg_dispatch_latency_ms: float = 0.0
    max_dispatch_latency_ms: float = 0.0
    p99_dispatch_latency_ms: float = 0.0

    # Timing
    started_at: Optional[datetime] = None
    last_message_at: Optional[datetime] = None

    def to_dict(self) -> Dict:
        """
        Convert to dictionary for JSON export.

        Returns:
            Dictionary representation of metrics
        """
        return {
            "total_messages": self.total_messages,
            "messages_by_level": {k.name: v for k, v in self.messages_by_level.items()},
            "suppressed_messages": self.suppressed_messages,
            "messages_per_second": self.messages_per_second,
            "avg_dispatch_latency_ms": self.avg_dispatch_latency_ms,
            "max_dispatch_latency_ms": self.max_dispatch_latency_ms,
            "p99_dispatch_latency_ms": self.p99_dispatch_latency_ms,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "last_message_at": self.last_message_at.isoformat() if self.last_message_at else None,
        }


class MetricsCollector:
    """
    Collects and aggregates logger metrics.

    Thread-safe. Loggers derived from one another share the collector
    they were configured with. Every observation is also forwarded to
    an optional monitor (see loggical.monitoring.monitor).
    """

    def __init__(self, rate_window_seconds: int = 60, monitor=None):
        """
        Initialize metrics collector.

        Args:
            rate_window_seconds: Time window for rate calculation
            monitor: Object with record_counter/record_gauge/record_histogram
        """
        self._metrics = LoggerMetrics(started_at=datetime.now())
        self._lock = threading.Lock()
        self._latency_samples: List[float] = []
        self._max_samples = 1000
        self._rate_window: List[float] = []
        self._rate_window_seconds = rate_window_seconds
        self.monitor = monitor

    def record_message(self, level: LogLevel, latency_ms: float = 0.0) -> None:
        """
        Record an emitted message.

        Args:
            level: Log level of the message
            latency_ms: Time spent formatting and dispatching
        """
        with self._lock:
            self._metrics.total_messages += 1
            self._metrics.messages_by_level[level] = (
                self._metrics.messages_by_level.get(level, 0) + 1
            )
            self._metrics.last_message_at = datetime.now()

            if latency_ms > 0:
                self._latency_samples.append(latency_ms)
                if len(self._latency_samples) > self._max_samples:
                    self._latency_samples = self._latency_samples[-self._max_samples:]

            rate = self._update_rate()

        if self.monitor is not None:
            self.monitor.record_counter("messages", 1, {"level": level.name})
            self.monitor.record_gauge("messages_per_second", rate)
            if latency_ms > 0:
                self.monitor.record_histogram("dispatch_latency", latency_ms)

    def record_suppressed(self, level: LogLevel) -> None:
        """Record a message dropped by the level gate."""
        with self._lock:
            self._metrics.suppressed_messages += 1

        if self.monitor is not None:
            self.monitor.record_counter("suppressed", 1, {"level": level.name})

    def _update_rate(self) -> float:
        now = time.time()
        self._rate_window.append(now)

        cutoff = now - self._rate_window_seconds
        self._rate_window = [ts for ts in self._rate_window if ts > cutoff]

        time_span = now - self._rate_window[0]
        if time_span > 0:
            self._metrics.messages_per_second = len(self._rate_window) / time_span
        return self._metrics.messages_per_second

    def _calculate_percentile(self, percentile: float) -> float:
        if not self._latency_samples:
            return 0.0

        sorted_samples = sorted(self._latency_samples)
        index = int(len(sorted_samples) * percentile / 100)
        index = min(index, len(sorted_samples) - 1)
        return sorted_samples[index]

    def _latency_stats(self) -> Tuple[float, float, float]:
        if not self._latency_samples:
            return 0.0, 0.0, 0.0
        return (
            sum(self._latency_samples) / len(self._latency_samples),
            max(self._latency_samples),
            self._calculate_percentile(99),
        )

    def get_metrics(self) -> LoggerMetrics:
        """
        Get current metrics snapshot.

        Returns:
            Copy of current LoggerMetrics
        """
        with self._lock:
            avg_latency, max_latency, p99_latency = self._latency_stats()
            return LoggerMetrics(
                total_messages=self._metrics.total_messages,
                messages_by_level=dict(self._metrics.messages_by_level),
                suppressed_messages=self._metrics.suppressed_messages,
                messages_per_second=self._metrics.messages_per_second,
                avg_dispatch_latency_ms=avg_latency,
                max_dispatch_latency_ms=max_latency,
                p99_dispatch_latency_ms=p99_latency,
                started_at=self._metrics.started_at,
                last_message_at=self._metrics.last_message_at,
            )

    def reset(self) -> None:
        """Reset all metrics to initial values."""
        with self._lock:
            self._metrics = LoggerMetrics(started_at=datetime.now())
            self._latency_samples.clear()
            self._rate_window.clear()
