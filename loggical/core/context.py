"""
Persistent context attached to every log line of a logger
"""

from typing import Any, Dict, Mapping, Optional, Union


class ContextManager:
    """
    Holds key/value pairs rendered with each message.

    Loggers never share an instance: derived loggers get a copy.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._context: Dict[str, Any] = dict(initial or {})

    def add_context(self, key_or_mapping: Union[str, Mapping[str, Any]], value: Any = None):
        """
        Add context data.

        Args:
            key_or_mapping: A key, or a mapping of several key/value pairs
            value: Value for a single key (None adds nothing)
        """
        if isinstance(key_or_mapping, str):
            if value is not None:
                self._context[key_or_mapping] = value
        else:
            self._context.update(key_or_mapping)

    def remove_context(self, key: str):
        self._context.pop(key, None)

    def clear_context(self):
        self._context.clear()

    def get_context(self) -> Dict[str, Any]:
        """Copy of the current context."""
        return dict(self._context)

    def has_context(self, key: str) -> bool:
        return key in self._context

    def get_context_value(self, key: str) -> Any:
        return self._context.get(key)

    def clone(self) -> "ContextManager":
        return ContextManager(self._context)

    def __len__(self) -> int:
        return len(self._context)
