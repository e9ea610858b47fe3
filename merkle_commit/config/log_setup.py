"""
Logging Setup

The library logs through ``logging.getLogger(__name__)`` loggers under the
``merkle_commit`` namespace. Applications own handlers and formatting; this
module only adjusts the namespace level from RuntimeConfig.
"""

from __future__ import annotations

import logging

from .runtime import RuntimeConfig, get_default_config

LOGGER_NAME = "merkle_commit"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(config: RuntimeConfig | None = None) -> logging.Logger:
    """
    Apply the configured level to the ``merkle_commit`` logger.

    ``logging.debug = True`` forces DEBUG regardless of ``logging.level``.
    The root logger is never touched.

    Returns:
        The configured package logger
    """
    config = config or get_default_config()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, config.logging.effective_level, logging.WARNING))
    return logger
