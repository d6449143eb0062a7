"""Logging configuration."""

import logging
import os
from dataclasses import dataclass, field
from typing import Literal

__all__ = ("LoggingConfig", "get_default_log_level")

_LEVELS = {"quiet": logging.WARNING, "normal": logging.INFO, "verbose": logging.DEBUG}


def get_default_log_level() -> "Literal['quiet', 'normal', 'verbose']":
    """Get default log level from environment variable.

    Checks LITESTAR_WEBPACK_LOG_LEVEL environment variable.
    Falls back to "normal" if not set or invalid.

    Returns:
        The log level from environment or "normal" default.
    """
    env_level = os.getenv("LITESTAR_WEBPACK_LOG_LEVEL", "").lower()
    match env_level:
        case "quiet" | "normal" | "verbose":
            return env_level
        case _:
            return "normal"


@dataclass
class LoggingConfig:
    """Logging configuration for the ``litestar_webpack`` logger.

    Attributes:
        level: Logging verbosity level.
            - "quiet": Warnings and errors only
            - "normal": Standard operational messages (default)
            - "verbose": Policy decisions (externals, entry promotion, hook calls)
            Can also be set via LITESTAR_WEBPACK_LOG_LEVEL environment variable.
    """

    level: "Literal['quiet', 'normal', 'verbose']" = field(default_factory=get_default_log_level)

    @property
    def log_level(self) -> int:
        return _LEVELS[self.level]

    def apply(self, logger_name: str = "litestar_webpack") -> None:
        """Set the configured level on the package logger."""
        logging.getLogger(logger_name).setLevel(self.log_level)
