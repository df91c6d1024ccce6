"""
Core module for the logger

This module contains the fundamental classes:
- Logger: Main logger class
- LogLevel / ColorLevel: Severity and color enumerations
- LoggerOptions / NormalizedLoggerOptions: Configuration
- LogMetadata: Per-call data handed to transports
- NamespaceRegistry: Per-namespace level overrides
"""

from loggical.core.log_level import ColorLevel, LogLevel
from loggical.core.logger import Logger, create_logger
from loggical.core.logger_config import LoggerOptions, NormalizedLoggerOptions
from loggical.core.log_metadata import LogMetadata
from loggical.core.namespace import NamespaceRegistry

__all__ = [
    "Logger",
    "create_logger",
    "LogLevel",
    "ColorLevel",
    "LoggerOptions",
    "NormalizedLoggerOptions",
    "LogMetadata",
    "NamespaceRegistry",
]
