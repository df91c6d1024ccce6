"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

loggical - A universal logging façade with readable, colorized output,
redaction, filtered stack traces and pluggable transports
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from loggical.core.log_level import ColorLevel, LogLevel
from loggical.core.logger import Logger, create_logger
from loggical.core.logger_config import (
    DEFAULT_LOGGER_OPTIONS,
    FORMAT_PRESETS,
    PRESET_CONFIGS,
    LoggerOptions,
    NormalizedLoggerOptions,
)
from loggical.core.log_metadata import LogMetadata
from loggical.core.namespace import NamespaceRegistry, parse_namespace_config
from loggical.core.plugins import MessageTransform, NamespaceResolver, Plugin, RedactionStrategy
from loggical.transports import BaseTransport, ConsoleTransport, FileTransport

# Import submodules (not all classes by default)
from loggical import config
from loggical import formatters
from loggical import monitoring

__all__ = [
    "Logger",
    "create_logger",
    "LogLevel",
    "ColorLevel",
    "LoggerOptions",
    "NormalizedLoggerOptions",
    "DEFAULT_LOGGER_OPTIONS",
    "PRESET_CONFIGS",
    "FORMAT_PRESETS",
    "LogMetadata",
    "NamespaceRegistry",
    "parse_namespace_config",
    "Plugin",
    "RedactionStrategy",
    "MessageTransform",
    "NamespaceResolver",
    "BaseTransport",
    "ConsoleTransport",
    "FileTransport",
    "config",
    "formatters",
    "monitoring",
]
