"""Transports module - log output destinations"""

from loggical.transports.base_transport import BaseTransport, TransportOptions
from loggical.transports.console_transport import ConsoleTransport
from loggical.transports.file_transport import FileTransport

__all__ = ["BaseTransport", "TransportOptions", "ConsoleTransport", "FileTransport"]
