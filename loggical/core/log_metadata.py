"""
Per-call log metadata handed to transports
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from loggical.core.log_level import LogLevel
from loggical.utils.stack_trace import FilteredStackTrace


@dataclass
class LogMetadata:
    """
    Everything a transport may want to know about a log call besides the
    formatted text.

    A fresh instance is built for every call and shared by all transports
    of that call.
    """

    level: LogLevel
    timestamp: datetime = field(default_factory=datetime.now)
    namespace: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    prefix: List[str] = field(default_factory=list)
    stack_trace: Optional[FilteredStackTrace] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict (for structured transports)."""
        return {
            "level": self.level.name,
            "timestamp": self.timestamp.isoformat(),
            "namespace": self.namespace,
            "context": dict(self.context),
            "prefix": list(self.prefix),
            "stack_trace": self.stack_trace.filtered_stack if self.stack_trace else None,
        }
