"""Shared fixtures"""

import os

import pytest

from loggical.transports.base_transport import BaseTransport

ISOLATED_VARIABLES = (
    "NO_COLOR",
    "FORCE_COLOR",
    "PYTHON_ENV",
    "APP_ENV",
    "ENV",
    "LOGGER_NAMESPACES",
)


class MemoryTransport(BaseTransport):
    """Collects formatted messages and their metadata."""

    name = "memory"

    def __init__(self, name="memory", **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.messages = []
        self.metadata = []

    def write(self, formatted_message, metadata):
        self.messages.append(formatted_message)
        self.metadata.append(metadata)


class FailingTransport(BaseTransport):
    """Raises on every write."""

    name = "failing"

    def write(self, formatted_message, metadata):
        raise IOError("disk full")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("LOGGER_"):
            monkeypatch.delenv(name, raising=False)
    for name in ISOLATED_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def memory_transport():
    return MemoryTransport()


@pytest.fixture
def force_color(monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")
