"""
Runtime Configuration Module

Provides configuration loading and logging setup for merkle_commit.
"""

from .runtime import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from .log_setup import LOGGER_NAME, configure_logging

__all__ = [
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
    "LOGGER_NAME",
    "configure_logging",
]
