"""
Interfaces (Protocols) for the services bound in the registry
"""
from pathlib import Path
from typing import Protocol, Optional, Sequence, Mapping, Any, runtime_checkable

from domain.entities import StartParameter
from domain.enums import LogLevel


@runtime_checkable
class LoggingConfigurer(Protocol):
    """Applies the build's log level to the logging system"""

    def configure(self, log_level: LogLevel) -> None:
        """Configure logging"""
        ...


@runtime_checkable
class StartParameterConverter(Protocol):
    """Turns command-line arguments into start parameters"""

    def convert(self, args: Sequence[str], start_parameter: Optional[StartParameter] = None) -> StartParameter:
        """Convert arguments"""
        ...


@runtime_checkable
class Cache(Protocol):
    """Key-value cache living in a cache directory"""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def put(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def close(self) -> None:
        ...


class BuildCache(Cache, Protocol):
    """Cache scoped to one build"""


@runtime_checkable
class CacheFactory(Protocol):
    """Opens caches by directory"""

    def open(self, cache_dir: Path, properties: Optional[Mapping[str, str]] = None) -> Cache:
        """Open or reuse the cache for cache_dir"""
        ...

    def close(self) -> None:
        """Close every cache this factory opened"""
        ...
