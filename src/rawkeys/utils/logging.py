"""Logging setup utilities for rawkeys.

Configures logging for the entire application based on the logging
configuration settings.
"""

from __future__ import annotations

import logging
import sys

from rawkeys.config.settings import LoggingConfig

# Output post-processing is off in raw mode, so a bare "\n" would not
# return the cursor to column zero.
RAW_TERMINATOR = "\r\n"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure logging for the rawkeys application.

    Sets up the 'rawkeys' logger with the specified level, format, a
    stderr handler, and an optional file handler. Handlers installed by
    an earlier call are replaced.

    Args:
        config: Logging configuration. If None, uses defaults
                (WARNING level, stderr output).

    Returns:
        The configured 'rawkeys' logger.
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("rawkeys")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.WARNING))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.terminator = RAW_TERMINATOR
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", config.level)
    return root_logger
