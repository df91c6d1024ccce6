"""
Main Logger class

Formats messages synchronously and hands each line to every configured
transport in registration order.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import functools
import inspect
import sys
import threading
import time

from loggical.config.merger import handle_preset_configuration, process_logger_configuration
from loggical.core.context import ContextManager
from loggical.core.log_level import LogLevel
from loggical.core.log_metadata import LogMetadata
from loggical.core.logger_config import LoggerOptions, NormalizedLoggerOptions
from loggical.core.plugins import PluginManager
from loggical.formatters.log_formatter import LogFormatter
from loggical.transports.base_transport import (
    CLOSE_TIMEOUT,
    SHARED_BACKGROUND_LOOP,
    report_transport_error,
    schedule_awaitable,
)
from loggical.transports.console_transport import ConsoleTransport
from loggical.utils.stack_trace import capture_filtered_stack_trace

SEPARATOR = "─" * 50

OptionsType = Union[LoggerOptions, Mapping[str, Any], None]


def _to_options(options: OptionsType, overrides: Mapping[str, Any]) -> LoggerOptions:
    if options is None:
        options = LoggerOptions()
    elif not isinstance(options, LoggerOptions):
        options = LoggerOptions.from_dict(dict(options))
    if overrides:
        options = options.merged_with(LoggerOptions(**overrides))
    return options


class Logger:
    """
    Logger with level gating, formatting and transport fan-out.

    Loggers are cheap to derive: with_prefix, with_context and friends
    return new loggers that share transports and plugins with their parent
    but never its configuration or context.

    Example:
        logger = Logger(min_level=LogLevel.DEBUG, prefix="API")
        logger.info("Server started on port", 8080)

        users = logger.with_prefix("Users").with_context("request_id", "r-1")
        users.warn("Slow query", {"ms": 812})
    """

    def __init__(self, options: OptionsType = None, **overrides):
        """
        Create a logger.

        Args:
            options: LoggerOptions (or a dict of option names)
            **overrides: Option fields layered on top of options

        Raises:
            ValueError: On invalid option values or duplicate plugin names
        """
        config = process_logger_configuration(_to_options(options, overrides))
        self._setup(config, ContextManager())

    def _setup(self, config: NormalizedLoggerOptions, context: ContextManager):
        if not config.transports:
            config = config.derive(transports=(ConsoleTransport(),))

        self._config = config
        self._context = context
        self._plugins = PluginManager(config.plugins)
        self._formatter = LogFormatter(config, self._plugins)
        self._output_lock = threading.RLock()

    @classmethod
    def _from_config(cls, config: NormalizedLoggerOptions, context: ContextManager) -> "Logger":
        logger = cls.__new__(cls)
        logger._setup(config, context)
        return logger

    # Factories

    @classmethod
    def create(cls, options: OptionsType = None, **overrides) -> "Logger":
        return cls(options, **overrides)

    @classmethod
    def compact(cls, options: OptionsType = None, **overrides) -> "Logger":
        """Logger with the compact preset."""
        return cls(LoggerOptions(preset="compact").merged_with(_to_options(options, overrides)))

    @classmethod
    def readable(cls, options: OptionsType = None, **overrides) -> "Logger":
        """Logger with the readable preset."""
        return cls(LoggerOptions(preset="readable").merged_with(_to_options(options, overrides)))

    @classmethod
    def server(cls, options: OptionsType = None, **overrides) -> "Logger":
        """Logger with the server preset."""
        return cls(LoggerOptions(preset="server").merged_with(_to_options(options, overrides)))

    @classmethod
    def development(cls, options: OptionsType = None, **overrides) -> "Logger":
        """Readable preset, DEBUG level and timestamps unless overridden."""
        base = LoggerOptions(preset="readable", min_level=LogLevel.DEBUG, timestamped=True)
        return cls(base.merged_with(_to_options(options, overrides)))

    # Logging

    def debug(self, *messages: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, messages)

    def info(self, *messages: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, messages)

    def warn(self, *messages: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARN, messages)

    def error(self, *messages: Any) -> None:
        """Log error message (with a filtered stack trace)."""
        self._log(LogLevel.ERROR, messages)

    def highlight(self, *messages: Any) -> None:
        """Log a message that needs attention."""
        self._log(LogLevel.HIGHLIGHT, messages)

    def fatal(self, *messages: Any) -> None:
        """
        Log fatal message.

        Exits the process with status 1 after dispatch when
        fatal_exits_process is set.
        """
        self._log(LogLevel.FATAL, messages)

    def log(self, level: LogLevel, *messages: Any) -> None:
        """Log at an explicit level."""
        self._log(LogLevel(level), messages)

    def effective_min_level(self) -> LogLevel:
        """
        Minimum level applied to this logger's calls.

        A namespace match in the registry (or a namespace resolver plugin)
        replaces the logger's own minimum level.
        """
        namespace = self._config.namespace
        if namespace:
            registry = self._config.namespace_registry
            if registry is not None:
                level = registry.get_min_level_for_namespace(namespace)
                if level is not None:
                    return level
            for resolver in self._plugins.get_namespace_resolvers():
                level = resolver.get_min_level_for_namespace(namespace)
                if level is not None:
                    return level
        return self._config.min_level

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.effective_min_level()

    def _log(self, level: LogLevel, messages: Tuple[Any, ...]) -> None:
        metrics = self._config.metrics
        if not self.is_enabled_for(level):
            if metrics is not None:
                metrics.record_suppressed(level)
            return

        start = time.perf_counter()
        stack_trace = capture_filtered_stack_trace() if level >= LogLevel.ERROR else None
        timestamp = datetime.now()
        context = self._context.get_context()

        try:
            formatted = self._formatter.format_log(level, messages, context, timestamp)
        except Exception as e:
            print(f"Logger formatting error: {e!r}", file=sys.stderr)
            formatted = f"{level.name} [Unable to format log message: {type(e).__name__}]"

        metadata = LogMetadata(
            level=level,
            timestamp=timestamp,
            namespace=self._config.namespace,
            context=context,
            prefix=list(self._config.prefix),
            stack_trace=stack_trace,
        )

        with self._output_lock:
            self._print_separator_and_space()
            self._dispatch(formatted, metadata)

        if metrics is not None:
            metrics.record_message(level, (time.perf_counter() - start) * 1000)

        if level == LogLevel.FATAL and self._config.fatal_exits_process:
            sys.exit(1)

    def _print_separator_and_space(self):
        if self._config.show_separators:
            print(SEPARATOR, file=sys.stdout)
        if self._config.space_messages:
            print(file=sys.stdout)

    def _dispatch(self, formatted: str, metadata: LogMetadata):
        for transport in self._config.transports:
            safe_write = getattr(transport, "safe_write", None)
            if safe_write is not None:
                safe_write(formatted, metadata)
                continue
            # Bare transports only promise write()
            name = _transport_name(transport)
            try:
                result = transport.write(formatted, metadata)
            except Exception as e:
                report_transport_error(name, e)
                continue
            if inspect.isawaitable(result):
                schedule_awaitable(
                    result,
                    on_error=functools.partial(report_transport_error, name),
                    runner=SHARED_BACKGROUND_LOOP,
                )

    # Derivation

    def _derive(self, context: Optional[ContextManager] = None, **changes) -> "Logger":
        config = self._config.derive(**changes) if changes else self._config
        return Logger._from_config(config, context if context is not None else self._context.clone())

    def __call__(self, options: OptionsType = None, **overrides) -> "Logger":
        """
        Derive a logger with some options changed.

        Example:
            verbose = logger(min_level=LogLevel.DEBUG)
        """
        given = handle_preset_configuration(_to_options(options, overrides)).given()
        changes = {k: v for k, v in given.items() if hasattr(self._config, k)}
        return self._derive(**changes)

    def with_prefix(self, prefix: str) -> "Logger":
        """Child logger with prefix appended to the existing ones."""
        return self._derive(prefix=self._config.prefix + (prefix,))

    def with_context(self, key_or_mapping: Union[str, Mapping[str, Any]], value: Any = None) -> "Logger":
        """Child logger with extra context (a key and value, or a mapping)."""
        context = self._context.clone()
        context.add_context(key_or_mapping, value)
        return self._derive(context)

    def without_context(self) -> "Logger":
        """Child logger with empty context."""
        return self._derive(ContextManager())

    def without_context_key(self, key: str) -> "Logger":
        context = self._context.clone()
        context.remove_context(key)
        return self._derive(context)

    def with_namespace(self, namespace: str, registry=None) -> "Logger":
        """
        Child logger in a namespace.

        Args:
            namespace: Colon-separated namespace ("app:db")
            registry: NamespaceRegistry to consult (default: keep current)
        """
        changes = {"namespace": namespace}
        if registry is not None:
            changes["namespace_registry"] = registry
        return self._derive(**changes)

    def with_transport(self, transport) -> "Logger":
        """Child logger with one more transport."""
        return self._derive(transports=self._config.transports + (transport,))

    def without_transport(self, name: str) -> "Logger":
        """Child logger without the transports called name."""
        kept = tuple(t for t in self._config.transports if _transport_name(t) != name)
        return self._derive(transports=kept)

    # Introspection

    def get_context(self) -> Dict[str, Any]:
        return self._context.get_context()

    def get_options(self) -> NormalizedLoggerOptions:
        return self._config

    def get_transport(self, name: str):
        """First transport called name, or None."""
        for transport in self._config.transports:
            if _transport_name(transport) == name:
                return transport
        return None

    def get_transports(self) -> List[Any]:
        return list(self._config.transports)

    def get_transport_status(self) -> List[Dict[str, Any]]:
        status = []
        for transport in self._config.transports:
            get_status = getattr(transport, "get_status", None)
            status.append(get_status() if get_status else {"name": _transport_name(transport)})
        return status

    def get_plugins(self) -> Tuple[Any, ...]:
        return self._plugins.get_plugins()

    def has_plugin(self, name: str) -> bool:
        return self._plugins.has_plugin(name)

    def get_metrics(self):
        """Metrics snapshot, or None when no MetricsCollector is configured."""
        metrics = self._config.metrics
        return metrics.get_metrics() if metrics is not None else None

    def close(self, timeout: Optional[float] = CLOSE_TIMEOUT) -> None:
        """
        Close plugins, then transports.

        Waits up to timeout seconds for pending awaitable writes of bare
        transports. BaseTransport subclasses wait for their own in close().
        """
        self._plugins.close_all()
        for transport in self._config.transports:
            close = getattr(transport, "close", None)
            if callable(close):
                close()
        SHARED_BACKGROUND_LOOP.wait(timeout)

    def __repr__(self) -> str:
        return (
            f"Logger(min_level={self._config.min_level.name}, "
            f"prefix={list(self._config.prefix)}, "
            f"transports={[_transport_name(t) for t in self._config.transports]})"
        )


def _transport_name(transport) -> str:
    return getattr(transport, "name", None) or type(transport).__name__


def create_logger(options: OptionsType = None, **overrides) -> Logger:
    """
    Create a logger.

    Example:
        logger = create_logger(preset="server", prefix="worker")
    """
    return Logger(options, **overrides)
