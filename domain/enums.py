"""
Domain enums
"""
import logging
from enum import Enum


class LogLevel(Enum):
    """Build output log level"""
    DEBUG = "debug"
    INFO = "info"
    LIFECYCLE = "lifecycle"
    QUIET = "quiet"

    @property
    def python_level(self) -> int:
        """Matching level for the logging module"""
        return _PYTHON_LEVELS[self]

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Parse a level name, case-insensitive"""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown log level: {value}")


# LIFECYCLE sits between INFO and WARNING
LIFECYCLE = 25

_PYTHON_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.LIFECYCLE: LIFECYCLE,
    LogLevel.QUIET: logging.ERROR,
}


class RegistryState(Enum):
    """Service registry lifecycle phase"""
    BUILDING = "building"
    SEALED = "sealed"
    CLOSED = "closed"
