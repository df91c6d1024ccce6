"""Tests for the Logger class"""

import asyncio
import threading
import time
from unittest.mock import Mock

import pytest

from conftest import FailingTransport, MemoryTransport
from loggical import (
    ColorLevel,
    ConsoleTransport,
    Logger,
    LoggerOptions,
    LogLevel,
    NamespaceRegistry,
    Plugin,
    create_logger,
)
from loggical.core.logger import SEPARATOR
from loggical.monitoring import MetricsCollector
from loggical.transports import BaseTransport

PLAIN = dict(color_level=ColorLevel.NONE, timestamped=False, use_symbols=False)


def make_logger(**kwargs):
    transport = kwargs.pop("transport", None) or MemoryTransport()
    logger = Logger(transports=[transport], **PLAIN, **kwargs)
    return logger, transport


class UppercaseRedaction(Plugin):
    name = "uppercase"

    def redact(self, value):
        return value.upper() if isinstance(value, str) else value


class Exclaim(Plugin):
    name = "exclaim"

    def transform(self, text, level):
        return f"{text}!"


class QuietNamespace(Plugin):
    name = "quiet"

    def get_min_level_for_namespace(self, namespace):
        return LogLevel.ERROR if namespace == "quiet" else None


class ClosablePlugin(Plugin):
    name = "closable"

    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class TestLogging:
    """Test basic logging."""

    def test_levels(self):
        logger, transport = make_logger(min_level=LogLevel.DEBUG)
        logger.debug("d")
        logger.info("i")
        logger.warn("w")
        logger.error("e")
        logger.highlight("h")
        logger.fatal("f")
        assert transport.messages == [
            "DEBUG d", "INFO i", "WARN w", "ERROR e", "HIGHLIGHT h", "FATAL f",
        ]

    def test_multiple_messages(self):
        logger, transport = make_logger()
        logger.info("port", 8080, None)
        assert transport.messages == ["INFO port 8080 None"]

    def test_log_explicit_level(self):
        logger, transport = make_logger()
        logger.log(LogLevel.WARN, "w")
        assert transport.messages == ["WARN w"]

    def test_default_redaction(self):
        logger, transport = make_logger()
        logger.info({"password": "hunter2", "user": "bob"})
        assert '"password": "***"' in transport.messages[0]
        assert "hunter2" not in transport.messages[0]

    def test_redaction_disabled(self):
        logger, transport = make_logger(redaction=False, compact_objects=True)
        logger.info({"password": "hunter2"})
        assert "hunter2" in transport.messages[0]

    def test_metadata(self):
        logger, transport = make_logger()
        logger.with_prefix("API").with_context("user", "bob").info("x")
        metadata = transport.metadata[0]
        assert metadata.level == LogLevel.INFO
        assert metadata.prefix == ["API"]
        assert metadata.context == {"user": "bob"}
        assert metadata.stack_trace is None

    def test_error_captures_caller(self):
        logger, transport = make_logger()
        logger.error("boom")
        stack_trace = transport.metadata[0].stack_trace
        assert stack_trace is not None
        assert stack_trace.frames[0].function.endswith("test_error_captures_caller")
        assert "loggical/core" not in stack_trace.filtered_stack


class TestLevelGate:
    """Test minimum level handling."""

    def test_below_minimum_dropped(self):
        logger, transport = make_logger(min_level=LogLevel.WARN)
        logger.info("dropped")
        logger.warn("kept")
        assert transport.messages == ["WARN kept"]

    def test_default_minimum_info(self):
        logger, transport = make_logger()
        logger.debug("dropped")
        assert transport.messages == []
        assert logger.effective_min_level() == LogLevel.INFO

    def test_is_enabled_for(self):
        logger, _ = make_logger(min_level=LogLevel.ERROR)
        assert not logger.is_enabled_for(LogLevel.WARN)
        assert logger.is_enabled_for(LogLevel.FATAL)

    def test_environment_level(self, monkeypatch):
        monkeypatch.setenv("LOGGER_LEVEL", "error")
        logger, transport = make_logger()
        logger.warn("dropped")
        assert transport.messages == []

    def test_programmatic_beats_environment(self, monkeypatch):
        monkeypatch.setenv("LOGGER_LEVEL", "error")
        logger, transport = make_logger(min_level=LogLevel.INFO)
        logger.info("kept")
        assert transport.messages == ["INFO kept"]

    def test_development_mode(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "development")
        logger, transport = make_logger()
        logger.debug("kept")
        assert transport.messages == ["DEBUG kept"]

    def test_transport_level(self):
        errors = MemoryTransport(name="errors", min_level=LogLevel.ERROR)
        everything = MemoryTransport(name="all")
        logger = Logger(transports=[everything, errors], **PLAIN)
        logger.info("i")
        logger.error("e")
        assert everything.messages == ["INFO i", "ERROR e"]
        assert errors.messages == ["ERROR e"]


class TestConsoleOutput:
    """Test the default console transport."""

    def test_default_transport(self):
        logger = Logger(**PLAIN)
        transports = logger.get_transports()
        assert len(transports) == 1
        assert isinstance(transports[0], ConsoleTransport)

    def test_info_to_stdout(self, capsys):
        Logger(**PLAIN).info("hello")
        captured = capsys.readouterr()
        assert captured.out == "INFO hello\n"
        assert captured.err == ""

    def test_warn_to_stderr(self, capsys):
        Logger(**PLAIN).warn("careful")
        captured = capsys.readouterr()
        assert captured.err == "WARN careful\n"
        assert captured.out == ""

    def test_error_prints_stack_trace(self, capsys):
        Logger(**PLAIN).error("boom")
        captured = capsys.readouterr()
        assert captured.err == "ERROR boom\n"
        assert captured.out.startswith("Stack trace:\nTraceback (most recent call first):")
        assert "test_error_prints_stack_trace" in captured.out

    def test_separator(self, capsys):
        logger, transport = make_logger(show_separators=True)
        logger.info("x")
        assert capsys.readouterr().out == SEPARATOR + "\n"
        assert transport.messages == ["INFO x"]

    def test_space_messages(self, capsys):
        logger, _ = make_logger(space_messages=True)
        logger.info("x")
        assert capsys.readouterr().out == "\n"

    def test_dropped_message_prints_nothing(self, capsys):
        logger, _ = make_logger(show_separators=True, min_level=LogLevel.ERROR)
        logger.info("x")
        assert capsys.readouterr().out == ""


class TestFatal:
    """Test fatal handling."""

    def test_fatal_does_not_exit_by_default(self):
        logger, transport = make_logger()
        logger.fatal("bye")
        assert transport.messages == ["FATAL bye"]

    def test_fatal_exits(self):
        logger, transport = make_logger(fatal_exits_process=True)
        with pytest.raises(SystemExit) as exc_info:
            logger.fatal("bye")
        assert exc_info.value.code == 1
        assert transport.messages == ["FATAL bye"]

    def test_fatal_exit_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOGGER_FATAL_EXIT", "true")
        logger, _ = make_logger()
        with pytest.raises(SystemExit):
            logger.fatal("bye")


class TestTransportErrors:
    """Test transport error isolation."""

    def test_failing_transport_isolated(self, capsys):
        transport = MemoryTransport()
        logger = Logger(transports=[FailingTransport(), transport], **PLAIN)
        logger.info("x")
        assert transport.messages == ["INFO x"]
        assert capsys.readouterr().err.count('Transport "failing" error') == 1

    def test_silent_transport(self, capsys):
        transport = MemoryTransport()
        logger = Logger(transports=[FailingTransport(silent=True), transport], **PLAIN)
        logger.info("x")
        assert transport.messages == ["INFO x"]
        assert capsys.readouterr().err == ""

    def test_bare_transport(self, capsys):
        class Bare:
            name = "bare"

            def write(self, formatted_message, metadata):
                raise RuntimeError("nope")

        logger = Logger(transports=[Bare()], **PLAIN)
        logger.info("x")
        assert 'Transport "bare" error' in capsys.readouterr().err

    def test_write_only_transport(self):
        transport = Mock(spec=["name", "write"])
        transport.name = "mock"
        logger = Logger(transports=[transport], **PLAIN)
        logger.info("x")
        transport.write.assert_called_once()
        formatted, metadata = transport.write.call_args[0]
        assert formatted == "INFO x"
        assert metadata.level == LogLevel.INFO

    def test_bare_async_transport(self):
        class BareAsync:
            name = "bare-async"

            def __init__(self):
                self.messages = []

            async def write(self, formatted_message, metadata):
                await asyncio.sleep(0)
                self.messages.append(formatted_message)

        transport = BareAsync()
        logger = Logger(transports=[transport], **PLAIN)
        logger.info("x")
        logger.close()
        assert transport.messages == ["INFO x"]

    def test_bare_async_transport_error(self, capsys):
        class BareAsync:
            name = "bare-async"

            async def write(self, formatted_message, metadata):
                raise ConnectionError("peer gone")

        logger = Logger(transports=[BareAsync()], **PLAIN)
        logger.info("x")
        logger.close()
        err = capsys.readouterr().err
        assert 'Transport "bare-async" error' in err
        assert "peer gone" in err

    def test_async_transport_does_not_block(self):
        release = threading.Event()

        class Gated(BaseTransport):
            name = "gated"

            def __init__(self):
                super().__init__()
                self.messages = []

            async def write(self, formatted_message, metadata):
                while not release.is_set():
                    await asyncio.sleep(0.01)
                self.messages.append(formatted_message)

        transport = Gated()
        logger = Logger(transports=[transport], **PLAIN)
        start = time.perf_counter()
        logger.info("x")
        assert time.perf_counter() - start < 0.5
        assert transport.messages == []
        release.set()
        logger.close()
        assert transport.messages == ["INFO x"]


class TestFormattingFaults:
    """Test that formatting failures never escape a log call."""

    def test_failing_str(self):
        class Weird:
            def __str__(self):
                raise RuntimeError("no str")

        logger, transport = make_logger()
        logger.info("value", Weird())
        assert transport.messages == ["INFO value [Unable to format: RuntimeError]"]

    def test_failing_transform(self, capsys):
        class BrokenTransform(Plugin):
            name = "broken-transform"

            def transform(self, text, level):
                raise RuntimeError("transform failed")

        logger, transport = make_logger(plugins=[BrokenTransform()])
        logger.info("x")
        assert transport.messages == ["INFO [Unable to format log message: RuntimeError]"]
        assert "Logger formatting error" in capsys.readouterr().err

    def test_failing_redaction_strategy(self, capsys):
        class BrokenRedaction(Plugin):
            name = "broken-redaction"

            def redact(self, value):
                raise RuntimeError("redaction failed")

        logger, transport = make_logger(plugins=[BrokenRedaction()])
        logger.info("password", "hunter2")
        assert transport.messages == ["INFO [Unable to format log message: RuntimeError]"]
        assert "Logger formatting error" in capsys.readouterr().err

    def test_cyclic_exception_cause(self):
        first = ValueError("first")
        second = ValueError("second")
        first.__cause__ = second
        second.__cause__ = first

        logger, transport = make_logger()
        logger.warn("failed", first)
        assert len(transport.messages) == 1
        assert "[Circular Reference]" in transport.messages[0]


class TestDerivation:
    """Test child loggers."""

    def test_with_prefix(self):
        logger, transport = make_logger()
        logger.with_prefix("API").with_prefix("Users").info("x")
        logger.info("y")
        assert transport.messages == ["INFO [API:Users] x", "INFO y"]

    def test_prefix_option(self):
        logger, transport = make_logger(prefix=["API", "Users"])
        logger.info("x")
        assert transport.messages == ["INFO [API:Users] x"]

    def test_with_context(self):
        logger, transport = make_logger()
        child = logger.with_context("user", "bob").with_context({"n": 1})
        child.info("x")
        logger.info("y")
        assert transport.messages == ["INFO [user:bob n:1] x", "INFO y"]
        assert logger.get_context() == {}

    def test_context_redacted(self):
        logger, transport = make_logger()
        logger.with_context("token", "abc").info("x")
        assert transport.messages == ["INFO [token:***] x"]

    def test_without_context(self):
        logger, transport = make_logger()
        child = logger.with_context({"a": 1, "b": 2})
        assert child.without_context_key("a").get_context() == {"b": 2}
        assert child.without_context().get_context() == {}
        assert child.get_context() == {"a": 1, "b": 2}

    def test_call_overrides(self):
        logger, transport = make_logger()
        verbose = logger(min_level=LogLevel.DEBUG)
        verbose.debug("kept")
        logger.debug("dropped")
        assert transport.messages == ["DEBUG kept"]

    def test_call_with_preset(self):
        logger, _ = make_logger()
        child = logger(preset="compact")
        assert child.get_options().compact_objects is True
        assert child.get_options().max_value_length == 50
        assert logger.get_options().compact_objects is False

    def test_child_keeps_context(self):
        logger, transport = make_logger()
        logger.with_context("user", "bob")(min_level=LogLevel.DEBUG).debug("x")
        assert transport.messages == ["DEBUG [user:bob] x"]

    def test_with_transport(self):
        logger, first = make_logger()
        second = MemoryTransport(name="second")
        logger.with_transport(second).info("x")
        logger.info("y")
        assert first.messages == ["INFO x", "INFO y"]
        assert second.messages == ["INFO x"]

    def test_without_transport(self):
        logger, transport = make_logger()
        logger = logger.with_transport(MemoryTransport(name="second"))
        child = logger.without_transport("second")
        assert [t.name for t in child.get_transports()] == ["memory"]
        assert child.get_transport("second") is None
        assert logger.get_transport("second") is not None


class TestNamespaces:
    """Test namespace level overrides."""

    def test_registry_overrides_min_level(self):
        registry = NamespaceRegistry()
        registry.set_level("app:db:*", LogLevel.WARN)
        logger, transport = make_logger(min_level=LogLevel.DEBUG)
        db = logger.with_namespace("app:db:pool", registry)
        db.info("dropped")
        db.warn("kept")
        logger.debug("root")
        assert transport.messages == ["WARN kept", "DEBUG root"]
        assert transport.metadata[0].namespace == "app:db:pool"

    def test_registry_can_lower_level(self):
        registry = NamespaceRegistry()
        registry.set_level("app:*", LogLevel.DEBUG)
        logger, transport = make_logger(namespace_registry=registry)
        logger.with_namespace("app:http").debug("kept")
        assert transport.messages == ["DEBUG kept"]

    def test_unmatched_namespace(self):
        registry = NamespaceRegistry()
        registry.set_level("app:*", LogLevel.ERROR)
        logger, transport = make_logger()
        logger.with_namespace("worker", registry).info("kept")
        assert transport.messages == ["INFO kept"]

    def test_registry_changes_apply(self):
        registry = NamespaceRegistry()
        logger, transport = make_logger()
        db = logger.with_namespace("db", registry)
        db.info("first")
        registry.set_level("db", LogLevel.ERROR)
        db.info("second")
        assert transport.messages == ["INFO first"]

    def test_resolver_plugin(self):
        logger, transport = make_logger(plugins=[QuietNamespace()], namespace="quiet")
        logger.warn("dropped")
        logger.error("kept")
        assert transport.messages == ["ERROR kept"]


class TestPlugins:
    """Test plugin strategies."""

    def test_redaction_strategy(self):
        logger, transport = make_logger(plugins=[UppercaseRedaction()])
        logger.info("secret")
        assert transport.messages == ["INFO SECRET"]

    def test_redaction_strategy_respects_switch(self):
        logger, transport = make_logger(plugins=[UppercaseRedaction()], redaction=False)
        logger.info("secret")
        assert transport.messages == ["INFO secret"]

    def test_transform(self):
        logger, transport = make_logger(plugins=[Exclaim()])
        logger.info("hi")
        assert transport.messages == ["INFO hi!"]

    def test_duplicate_name(self):
        with pytest.raises(ValueError):
            make_logger(plugins=[Exclaim(), Exclaim()])

    def test_introspection(self):
        plugin = Exclaim()
        logger, _ = make_logger(plugins=[plugin])
        assert logger.has_plugin("exclaim")
        assert not logger.has_plugin("other")
        assert logger.get_plugins() == (plugin,)

    def test_shared_with_children(self):
        logger, transport = make_logger(plugins=[Exclaim()])
        logger.with_prefix("A").info("x")
        assert transport.messages == ["INFO [A] x!"]


class TestMetrics:
    """Test metrics collection."""

    def test_counts(self):
        metrics = MetricsCollector()
        logger, _ = make_logger(min_level=LogLevel.WARN, metrics=metrics)
        logger.info("dropped")
        logger.warn("w")
        logger.error("e")

        snapshot = logger.get_metrics()
        assert snapshot.total_messages == 2
        assert snapshot.suppressed_messages == 1
        assert snapshot.messages_by_level == {LogLevel.WARN: 1, LogLevel.ERROR: 1}
        assert snapshot.max_dispatch_latency_ms >= 0

    def test_shared_with_children(self):
        metrics = MetricsCollector()
        logger, _ = make_logger(metrics=metrics)
        logger.with_prefix("A").info("x")
        assert metrics.get_metrics().total_messages == 1

    def test_no_metrics(self):
        logger, _ = make_logger()
        assert logger.get_metrics() is None


class TestFactoriesAndLifecycle:
    """Test factories, introspection and close."""

    def test_compact(self):
        assert Logger.compact().get_options().max_value_length == 50
        assert Logger.compact(max_value_length=80).get_options().max_value_length == 80

    def test_readable(self):
        options = Logger.readable().get_options()
        assert options.compact_objects is True
        assert options.max_value_length == 60

    def test_server(self):
        options = Logger.server().get_options()
        assert options.show_separators is True
        assert options.max_value_length == 40

    def test_development(self):
        options = Logger.development().get_options()
        assert options.min_level == LogLevel.DEBUG
        assert options.timestamped is True
        assert Logger.development(min_level=LogLevel.WARN).get_options().min_level == LogLevel.WARN

    def test_create_logger(self):
        logger = create_logger({"prefix": "API", "min_level": "warn"})
        assert logger.get_options().prefix == ("API",)
        assert logger.get_options().min_level == LogLevel.WARN
        assert Logger.create(LoggerOptions(prefix="x")).get_options().prefix == ("x",)

    def test_transport_status(self):
        logger, transport = make_logger()
        logger.info("x")
        status = logger.get_transport_status()
        assert status[0]["name"] == "memory"
        assert status[0]["writes"] == 1

    def test_close(self):
        plugin = ClosablePlugin()
        logger, transport = make_logger(plugins=[plugin])
        logger.close()
        assert plugin.closed
        assert transport.closed
        logger.info("ignored")
        assert transport.messages == []

    def test_repr(self):
        logger, _ = make_logger(prefix="API")
        assert repr(logger) == "Logger(min_level=INFO, prefix=['API'], transports=['memory'])"
