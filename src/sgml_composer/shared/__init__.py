"""Shared utilities for markup composition.

This module provides the configuration objects and logging helpers used by
the markup tree, the description loader and the command-line interface.
"""

from .config import (
    ComposerConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    RenderConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "ComposerConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "RenderConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
