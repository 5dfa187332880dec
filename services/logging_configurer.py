"""
Logging configurer implementation
"""
import logging
import sys
from typing import Optional

from core.interfaces import LoggingConfigurer
from domain.enums import LogLevel, LIFECYCLE

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DefaultLoggingConfigurer(LoggingConfigurer):
    """Applies build log levels to a logger, the root logger by default"""

    def __init__(self, root: Optional[logging.Logger] = None):
        self._root = root
        self._handler: Optional[logging.Handler] = None
        self._level: Optional[LogLevel] = None

    @property
    def current_level(self) -> Optional[LogLevel]:
        return self._level

    def configure(self, log_level: LogLevel) -> None:
        """Set the level, installing a stdout handler on first use"""
        root = self._root if self._root is not None else logging.getLogger()
        logging.addLevelName(LIFECYCLE, 'LIFECYCLE')

        if self._handler is None and not root.handlers:
            self._handler = logging.StreamHandler(sys.stdout)
            self._handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(self._handler)

        root.setLevel(log_level.python_level)
        self._level = log_level

    def close(self) -> None:
        """Remove the handler installed by configure()"""
        if self._handler is None:
            return
        root = self._root if self._root is not None else logging.getLogger()
        root.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
