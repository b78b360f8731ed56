"""Logging configuration for normkit.

Provides console logging with appropriate levels for normkit code
vs third-party libraries.
"""

import logging
import sys
from typing import Literal

from normkit.settings import get_settings

# List of noisy third-party loggers to suppress
NOISY_LOGGERS = [
    "asyncio",
    "markdown_it",
]


def suppress_noisy_loggers() -> None:
    """Suppress noisy third-party loggers.

    Call this after importing libraries that configure their own logging.
    """
    for logger_name in NOISY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.handlers.clear()


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
) -> None:
    """Configure application logging.

    Sets up logging with:
    - normkit logs at the configured level
    - Third-party library logs suppressed to WARNING+
    - Clean console output format

    Args:
        level: Override log level (defaults to settings.log_level or INFO)
    """
    settings = get_settings()
    log_level = level or getattr(settings, "log_level", "INFO")
    if settings.debug and level is None:
        log_level = "DEBUG"

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level))

    formatter = logging.Formatter(
        "%(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("normkit").setLevel(getattr(logging, log_level))

    suppress_noisy_loggers()


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


# Configure logging on module import
configure_logging()
