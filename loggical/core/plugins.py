"""
Extension points

Behavior is extended by passing strategy objects in LoggerOptions.plugins.
A plugin may implement any of the strategy interfaces below; the logger
asks the PluginManager for the strategy it needs instead of letting
plugins patch logger internals.
"""

from typing import Any, Iterable, List, Optional, Tuple

from loggical.core.log_level import LogLevel


class Plugin:
    """
    Base class for plugins.

    Subclasses set name and version and implement one or more of
    RedactionStrategy, MessageTransform and NamespaceResolver.
    """

    name: str = "plugin"
    version: str = "0.0.0"

    def close(self):
        """Release resources when the owning logger closes."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, version={self.version!r})"


class RedactionStrategy:
    """Replaces the built-in redaction of messages and context."""

    def redact(self, value: Any) -> Any:
        raise NotImplementedError


class MessageTransform:
    """Rewrites the formatted line before it reaches the transports."""

    def transform(self, text: str, level: LogLevel) -> str:
        raise NotImplementedError


class NamespaceResolver:
    """Supplies a per-namespace minimum level."""

    def get_min_level_for_namespace(self, namespace: str) -> Optional[LogLevel]:
        raise NotImplementedError


class PluginManager:
    """
    Holds the plugins of one logger, in registration order.

    Duplicate names are rejected: the first plugin with a name wins.
    """

    def __init__(self, plugins: Iterable[Any] = ()):
        self._plugins: List[Any] = []
        for plugin in plugins:
            self.install(plugin)

    def install(self, plugin: Any):
        """
        Register a plugin.

        Raises:
            ValueError: If a plugin with the same name is installed
        """
        name = _plugin_name(plugin)
        if self.has_plugin(name):
            raise ValueError(f'Plugin "{name}" is already installed')
        self._plugins.append(plugin)

    def get_plugins(self) -> Tuple[Any, ...]:
        return tuple(self._plugins)

    def has_plugin(self, name: str) -> bool:
        return any(_plugin_name(p) == name for p in self._plugins)

    def get_redaction_strategy(self) -> Optional[RedactionStrategy]:
        """Last registered redaction strategy, or None."""
        strategies = [p for p in self._plugins if callable(getattr(p, "redact", None))]
        return strategies[-1] if strategies else None

    def get_namespace_resolvers(self) -> List[NamespaceResolver]:
        return [
            p for p in self._plugins
            if callable(getattr(p, "get_min_level_for_namespace", None))
        ]

    def apply_transforms(self, text: str, level: LogLevel) -> str:
        """Run every message transform over text, in registration order."""
        for plugin in self._plugins:
            transform = getattr(plugin, "transform", None)
            if callable(transform):
                text = transform(text, level)
        return text

    def close_all(self):
        """Close every plugin that has a close method."""
        for plugin in self._plugins:
            close = getattr(plugin, "close", None)
            if callable(close):
                close()

    def __len__(self) -> int:
        return len(self._plugins)


def _plugin_name(plugin: Any) -> str:
    return getattr(plugin, "name", None) or type(plugin).__name__
