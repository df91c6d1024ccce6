"""Console transport: stdout for log/info, stderr for warn/error"""

from typing import Any, Dict, Optional
import sys

from loggical.core.log_level import LogLevel
from loggical.core.log_metadata import LogMetadata
from loggical.formatters.level_formatting import get_console_method
from loggical.transports.base_transport import BaseTransport
from loggical.utils.stack_trace import capture_filtered_stack_trace

ERROR_STREAM_METHODS = ("warn", "error")


class ConsoleTransport(BaseTransport):
    """
    Write log lines to the console.

    This is the transport a logger uses when none is configured.
    """

    name = "console"

    def __init__(
        self,
        use_groups: bool = False,
        include_stack_trace: bool = True,
        stream=None,
        **kwargs,
    ):
        """
        Initialize console transport.

        Args:
            use_groups: Group related lines (kept for compatibility of
                        configuration, plain terminals have no groups)
            include_stack_trace: Print a filtered stack trace after
                                 ERROR-tier messages
            stream: Single output stream for every level (default: pick
                    stdout or stderr per level at write time)
            **kwargs: min_level, filter, silent
        """
        super().__init__(**kwargs)
        self.use_groups = use_groups
        self.include_stack_trace = include_stack_trace
        self.stream = stream

    def _stream_for(self, method: str):
        if self.stream is not None:
            return self.stream
        if method in ERROR_STREAM_METHODS:
            return sys.stderr
        return sys.stdout

    def _emit(self, text: str, method: str = "log"):
        stream = self._stream_for(method)
        stream.write(text + "\n")
        stream.flush()

    def write(self, formatted_message: str, metadata: LogMetadata):
        """Write one line, plus the stack trace for ERROR and above."""
        self._emit(formatted_message, get_console_method(metadata.level))

        if self.include_stack_trace and metadata.level >= LogLevel.ERROR:
            stack_trace = metadata.stack_trace
            if stack_trace is None or not stack_trace.filtered_stack:
                stack_trace = capture_filtered_stack_trace()
            if stack_trace.filtered_stack:
                self._emit(f"Stack trace:\n{stack_trace.filtered_stack}")

    def configure(self, **options):
        super().configure(**options)
        if isinstance(options.get("use_groups"), bool):
            self.use_groups = options["use_groups"]
        if isinstance(options.get("include_stack_trace"), bool):
            self.include_stack_trace = options["include_stack_trace"]

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status.update(
            use_groups=self.use_groups,
            include_stack_trace=self.include_stack_trace,
            available=True,
        )
        return status
