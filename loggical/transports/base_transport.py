"""
Transport contract

A transport is anything with write(formatted_message, metadata).
BaseTransport adds level and callback filtering, error isolation and a
simple lifecycle: constructed, configured any number of times, writing,
closed. A closed transport ignores further writes.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Optional, Set
import asyncio
import concurrent.futures
import inspect
import sys
import threading

from loggical.core.log_level import LogLevel
from loggical.core.log_metadata import LogMetadata

TransportFilter = Callable[[LogLevel, str, LogMetadata], bool]

# Seconds close() waits for pending awaitable writes
CLOSE_TIMEOUT = 5.0


def report_transport_error(name: str, error: Exception, silent: bool = False):
    """Print the transport error diagnostic to stderr unless silent."""
    if not silent:
        print(f'Transport "{name}" error: {error!r}', file=sys.stderr)


class BackgroundLoop:
    """
    Event loop on a daemon thread.

    Runs awaitable writes made while no event loop is running in the
    calling thread, so the log call returns immediately. The thread starts
    with the first submission and stops in stop().
    """

    def __init__(self, name: str = "loggical-transport"):
        self.name = name
        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._futures: Set[concurrent.futures.Future] = set()

    def submit(self, coroutine) -> concurrent.futures.Future:
        with self._lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._loop.run_forever, name=self.name, daemon=True
                )
                self._thread.start()
            future = asyncio.run_coroutine_threadsafe(coroutine, self._loop)
            self._futures.add(future)
        future.add_done_callback(self._discard)
        return future

    def _discard(self, future):
        with self._lock:
            self._futures.discard(future)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for submitted coroutines.

        Returns:
            False if some were still running when timeout expired
        """
        with self._lock:
            pending = list(self._futures)
        if not pending:
            return True
        _, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done

    def stop(self, timeout: Optional[float] = None):
        """Wait for submitted coroutines, then stop the loop thread."""
        self.wait(timeout)
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)
        if not thread.is_alive():
            loop.close()

    @property
    def running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()


# Used for transports that are not BaseTransport subclasses
SHARED_BACKGROUND_LOOP = BackgroundLoop("loggical-shared-transport")

_shared_tasks: Set[asyncio.Task] = set()


def _noop():
    pass


def schedule_awaitable(
    awaitable,
    on_error: Callable[[Exception], Any],
    on_success: Callable[[], Any] = _noop,
    runner: BackgroundLoop = SHARED_BACKGROUND_LOOP,
    tasks: Optional[Set[asyncio.Task]] = None,
):
    """
    Run an awaitable write without blocking the caller.

    Inside a running event loop it becomes a task on that loop, otherwise
    it is handed to runner. Errors go to on_error, never to the caller.

    Args:
        awaitable: Result of an async write()
        on_error: Called with the exception if the write fails
        on_success: Called after the write completes
        runner: Background loop used when no loop is running
        tasks: Set holding task references until they finish
    """
    async def complete():
        try:
            await awaitable
        except Exception as e:
            on_error(e)
        else:
            on_success()

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None:
        runner.submit(complete())
        return

    pending = _shared_tasks if tasks is None else tasks
    task = loop.create_task(complete())
    pending.add(task)
    task.add_done_callback(pending.discard)


@dataclass
class TransportOptions:
    """
    Options shared by all transports.

    min_level: Messages below this level are skipped
    filter: Callback (level, message, metadata) -> bool, False skips
    silent: Swallow write errors without a diagnostic
    """

    min_level: Optional[LogLevel] = None
    filter: Optional[TransportFilter] = None
    silent: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.filter is not None and not callable(self.filter):
            raise TypeError("filter must be callable")
        if isinstance(self.min_level, str):
            self.min_level = LogLevel.from_string(self.min_level)


_OPTION_NAMES = {f.name for f in fields(TransportOptions)}


class BaseTransport:
    """Base class for transports."""

    name = "transport"

    def __init__(
        self,
        min_level: Optional[LogLevel] = None,
        filter: Optional[TransportFilter] = None,
        silent: bool = False,
    ):
        self.options = TransportOptions(min_level=min_level, filter=filter, silent=silent)
        self._lock = threading.Lock()
        self._closed = False
        self._writes = 0
        self._errors = 0
        self._pending: Set[asyncio.Task] = set()
        self._runner = BackgroundLoop(f"loggical-{self.name}")

    @property
    def closed(self) -> bool:
        return self._closed

    def should_write(self, level: LogLevel, message: str, metadata: LogMetadata) -> bool:
        """Check the transport's level gate and filter callback."""
        if self.options.min_level is not None and level < self.options.min_level:
            return False
        if self.options.filter is not None and not self.options.filter(level, message, metadata):
            return False
        return True

    def write(self, formatted_message: str, metadata: LogMetadata):
        """
        Deliver one formatted message.

        May return an awaitable, which safe_write schedules.
        """
        raise NotImplementedError

    def safe_write(self, formatted_message: str, metadata: LogMetadata):
        """
        Write with filtering and error handling.

        Never raises. Errors are reported on stderr unless the transport
        is silent.
        """
        if self._closed:
            return
        if not self.should_write(metadata.level, formatted_message, metadata):
            return

        try:
            result = self.write(formatted_message, metadata)
        except Exception as e:
            self._handle_error(e)
            return

        if inspect.isawaitable(result):
            self._schedule(result)
        else:
            self._record_write()

    def _schedule(self, awaitable):
        schedule_awaitable(
            awaitable,
            on_error=self._handle_error,
            on_success=self._record_write,
            runner=self._runner,
            tasks=self._pending,
        )

    def _record_write(self):
        with self._lock:
            self._writes += 1

    def _handle_error(self, error: Exception):
        with self._lock:
            self._errors += 1
        report_transport_error(self.name, error, self.options.silent)

    def configure(self, **options):
        """
        Update options.

        Shared options (min_level, filter, silent) update TransportOptions,
        subclasses pick up their own keys.
        """
        shared = {k: v for k, v in options.items() if k in _OPTION_NAMES}
        if shared:
            self.options = replace(self.options, **shared)

    def get_status(self) -> Dict[str, Any]:
        """Name, options, counters and lifecycle state."""
        options = asdict(self.options)
        if options["min_level"] is not None:
            options["min_level"] = options["min_level"].name
        return {
            "name": self.name,
            "options": options,
            "writes": self._writes,
            "errors": self._errors,
            "closed": self._closed,
        }

    def flush(self, timeout: Optional[float] = CLOSE_TIMEOUT) -> bool:
        """
        Wait for awaitable writes running on the background loop.

        Returns:
            False if some were still pending when timeout expired
        """
        return self._runner.wait(timeout)

    def close(self, timeout: Optional[float] = CLOSE_TIMEOUT):
        """Stop accepting writes, then wait for pending awaitable writes."""
        self._closed = True
        self._runner.stop(timeout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
