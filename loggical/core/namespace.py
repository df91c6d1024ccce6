"""
Per-namespace minimum levels

Namespaces are colon-separated subsystem names ("app:db:pool"). Patterns
may use * wildcards, the most specific matching pattern wins.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional
import os
import re
import sys
import threading

from loggical.core.log_level import LogLevel

NAMESPACES_ENV_VAR = "LOGGER_NAMESPACES"


@dataclass(frozen=True)
class NamespaceConfig:
    """A namespace pattern and its minimum level."""

    pattern: str
    min_level: LogLevel


def _specificity(config: NamespaceConfig):
    # Fewer wildcards first, then longer patterns
    return (config.pattern.count("*"), -len(config.pattern))


def _compile(pattern: str) -> "re.Pattern":
    parts = (re.escape(part) for part in pattern.split("*"))
    return re.compile(f"^{'.*'.join(parts)}$")


class NamespaceRegistry:
    """
    Registry of namespace level overrides.

    Owned by the application and passed to loggers through
    LoggerOptions.namespace_registry. Lookups are cached until the
    configuration changes.

    Example:
        registry = NamespaceRegistry()
        registry.set_level("app:db:*", LogLevel.WARN)
        registry.get_min_level_for_namespace("app:db:pool")  # LogLevel.WARN
    """

    def __init__(self, configs: Optional[List[NamespaceConfig]] = None):
        self._lock = threading.Lock()
        self._configs: List[NamespaceConfig] = []
        self._patterns: Dict[str, "re.Pattern"] = {}
        self._cache: Dict[str, Optional[LogLevel]] = {}
        for config in configs or []:
            self.set_level(config.pattern, config.min_level)

    def set_level(self, pattern: str, min_level: LogLevel):
        """Set (or replace) the minimum level for a pattern."""
        with self._lock:
            self._configs = [c for c in self._configs if c.pattern != pattern]
            self._configs.append(NamespaceConfig(pattern, min_level))
            self._configs.sort(key=_specificity)
            self._patterns[pattern] = _compile(pattern)
            self._cache.clear()

    def remove_level(self, pattern: str):
        with self._lock:
            self._configs = [c for c in self._configs if c.pattern != pattern]
            self._patterns.pop(pattern, None)
            self._cache.clear()

    def clear(self):
        with self._lock:
            self._configs = []
            self._patterns.clear()
            self._cache.clear()

    def list_configs(self) -> List[NamespaceConfig]:
        """Configurations in match order (most specific first)."""
        with self._lock:
            return list(self._configs)

    def get_min_level_for_namespace(self, namespace: str) -> Optional[LogLevel]:
        """
        Minimum level for a namespace.

        Returns:
            Level of the most specific matching pattern, None if none match
        """
        with self._lock:
            if namespace in self._cache:
                return self._cache[namespace]

            level = None
            for config in self._configs:
                if self._patterns[config.pattern].match(namespace):
                    level = config.min_level
                    break

            self._cache[namespace] = level
            return level

    def load_from_environment(self, env: Optional[Mapping[str, str]] = None) -> bool:
        """
        Replace the configuration with LOGGER_NAMESPACES.

        Returns:
            True if the variable was present
        """
        environ = os.environ if env is None else env
        value = environ.get(NAMESPACES_ENV_VAR)
        if value is None:
            return False

        configs = parse_namespace_config(value)
        self.clear()
        for config in configs:
            self.set_level(config.pattern, config.min_level)
        return True

    def __len__(self) -> int:
        return len(self._configs)


def parse_namespace_config(config_string: str) -> List[NamespaceConfig]:
    """
    Parse "pattern:level" entries separated by commas.

    The level follows the last colon, so patterns may contain colons.
    Entries with an unknown level are skipped with a warning on stderr.

    Example:
        parse_namespace_config("app:*:debug,db:*:warn")
    """
    if not config_string or not config_string.strip():
        return []

    configs = []
    for entry in config_string.split(","):
        trimmed = entry.strip()
        if not trimmed or ":" not in trimmed:
            continue

        pattern, _, level_name = trimmed.rpartition(":")
        try:
            min_level = LogLevel.from_string(level_name)
        except ValueError:
            print(
                f'Invalid log level "{level_name}" in namespace config, skipping entry: {entry}',
                file=sys.stderr,
            )
            continue

        configs.append(NamespaceConfig(pattern, min_level))

    return configs
