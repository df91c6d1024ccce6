#!/usr/bin/env python3
"""Basic usage example"""

from loggical import ColorLevel, FileTransport, Logger, LogLevel, NamespaceRegistry


def main():
    # Readable output with debug messages
    logger = Logger.development(prefix="example")

    logger.debug("This is debug")
    logger.info("Application started on http://localhost:8080")
    logger.warn("Disk usage at 91%")
    logger.highlight("Deployment finished")

    # Objects are rendered compactly by the compact preset
    api = Logger.compact(prefix="API").with_context("request_id", "r-42")
    api.info("Login", {"user": "alice", "password": "hunter2", "roles": ["admin", "ops"]})

    # Errors carry a filtered stack trace
    try:
        raise ValueError("Invalid configuration")
    except ValueError as e:
        logger.error("Startup check failed", e)

    # Plain text file output next to the console
    file_logger = logger.with_transport(
        FileTransport("logs/example.log", min_level=LogLevel.WARN)
    )(color_level=ColorLevel.NONE)
    file_logger.warn("Written to console and logs/example.log")

    # Per-subsystem levels
    registry = NamespaceRegistry()
    registry.set_level("app:db:*", LogLevel.ERROR)
    db = logger.with_namespace("app:db:pool", registry)
    db.info("Suppressed by the namespace level")
    db.error("Connection lost")

    file_logger.close()


if __name__ == "__main__":
    main()
