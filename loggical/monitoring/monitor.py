"""
Monitor interface

A monitor receives every observation a MetricsCollector makes and
forwards it to an observability backend.
"""

from typing import Dict, List, Optional, Tuple


class Monitor:
    """Base monitor. Subclasses override the record methods they support."""

    def record_counter(self, name: str, value: int, tags: Optional[Dict[str, str]] = None) -> None:
        pass

    def record_gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        pass

    def record_histogram(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        pass


class NullMonitor(Monitor):
    """Discards everything."""


class InMemoryMonitor(Monitor):
    """
    Keeps observations in memory.

    Example:
        monitor = InMemoryMonitor()
        logger = Logger(LoggerOptions(metrics=MetricsCollector(monitor=monitor)))
        logger.info("hello")
        monitor.get_counter("messages", {"level": "INFO"})  # 1
    """

    def __init__(self):
        self.counters: Dict[Tuple[str, Tuple], int] = {}
        self.gauges: Dict[Tuple[str, Tuple], float] = {}
        self.histograms: Dict[Tuple[str, Tuple], List[float]] = {}

    @staticmethod
    def _key(name: str, tags: Optional[Dict[str, str]]) -> Tuple[str, Tuple]:
        return name, tuple(sorted((tags or {}).items()))

    def record_counter(self, name, value, tags=None):
        key = self._key(name, tags)
        self.counters[key] = self.counters.get(key, 0) + value

    def record_gauge(self, name, value, tags=None):
        self.gauges[self._key(name, tags)] = value

    def record_histogram(self, name, value, tags=None):
        self.histograms.setdefault(self._key(name, tags), []).append(value)

    def get_counter(self, name: str, tags: Optional[Dict[str, str]] = None) -> int:
        return self.counters.get(self._key(name, tags), 0)

    def get_gauge(self, name: str, tags: Optional[Dict[str, str]] = None) -> Optional[float]:
        return self.gauges.get(self._key(name, tags))

    def get_histogram(self, name: str, tags: Optional[Dict[str, str]] = None) -> List[float]:
        return list(self.histograms.get(self._key(name, tags), []))

    def reset(self):
        self.counters.clear()
        self.gauges.clear()
        self.histograms.clear()
