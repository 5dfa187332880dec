"""
Cache factory implementation
"""
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import CacheError
from core.interfaces import Cache, CacheFactory
from core.validators import CacheSettingsValidator

logger = logging.getLogger(__name__)


class PersistentCache(Cache):
    """In-memory cache bound to a directory and a set of properties"""

    def __init__(self, base_dir: Path, properties: Mapping[str, str]):
        self._base_dir = base_dir
        self._properties = dict(properties)
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._open = True

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def properties(self) -> Dict[str, str]:
        return dict(self._properties)

    @property
    def is_open(self) -> bool:
        return self._open

    def _check_open(self) -> None:
        if not self._open:
            raise CacheError(f"Cache {self._base_dir} is closed")

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            self._check_open()
            return self._entries.get(key, default)

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._check_open()
            self._entries[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._check_open()
            self._entries.pop(key, None)

    def close(self) -> None:
        with self._lock:
            self._open = False
            self._entries.clear()

    def __repr__(self) -> str:
        return f"PersistentCache({str(self._base_dir)!r}, open={self._open})"


class DefaultCacheFactory(CacheFactory):
    """Hands out one cache per directory.

    An open cache is reused while the requested properties match. Asking for
    the same directory with different properties closes the old cache and
    opens a fresh one, since its contents were built under other settings.
    """

    def __init__(self):
        self._caches: Dict[Path, PersistentCache] = {}
        self._lock = threading.Lock()
        self._closed = False

    def open(self, cache_dir: Path, properties: Optional[Mapping[str, str]] = None) -> PersistentCache:
        try:
            settings = CacheSettingsValidator(cache_dir=cache_dir, properties=dict(properties or {}))
        except PydanticValidationError as e:
            raise CacheError(f"Invalid cache settings for {cache_dir}: {e}")

        with self._lock:
            if self._closed:
                raise CacheError("Cache factory is closed")

            cache_dir = settings.cache_dir
            cache = self._caches.get(cache_dir)
            if cache is not None and cache.is_open:
                if cache.properties == settings.properties:
                    return cache
                logger.info(f"Cache properties changed for {cache_dir}, reopening")
                cache.close()

            cache = PersistentCache(cache_dir, settings.properties)
            self._caches[cache_dir] = cache
            logger.debug(f"Opened cache {cache_dir}")
            return cache

    def close(self) -> None:
        """Close every cache this factory opened"""
        with self._lock:
            self._closed = True
            caches = list(self._caches.values())
            self._caches.clear()
        for cache in caches:
            cache.close()
