"""Structured logging infrastructure.

Centralized logging configuration using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module

Example:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
]
