"""
Composition roots: the registries each scope starts with
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import config
from domain.entities import StartParameter
from services import DefaultCacheFactory, DefaultLoggingConfigurer, DefaultStartParameterConverter

from .container import ServiceRegistry
from .interfaces import BuildCache, CacheFactory, LoggingConfigurer, StartParameterConverter

logger = logging.getLogger(__name__)


class ScopeServicesRegistry(ServiceRegistry, ABC):
    """Registry that wires a fixed set of bindings and seals itself.

    Subclasses list their bindings in ``configure_services``. If any of them
    fails, everything already built is closed and the error propagates, so a
    half-wired registry never reaches callers.
    """

    def __init__(self, parent: Optional[ServiceRegistry] = None, name: Optional[str] = None):
        super().__init__(parent, name)
        try:
            self.configure_services()
        except Exception:
            self._discard()
            raise
        self.seal()

    @abstractmethod
    def configure_services(self) -> None:
        """Register this scope's bindings"""
        ...

    def _discard(self) -> None:
        try:
            self.close()
        except Exception as e:
            logger.error(f"Error while discarding registry {self.name}: {e}")


class GlobalServicesRegistry(ScopeServicesRegistry):
    """Contains the services shared by all builds in a given process."""

    def __init__(self):
        super().__init__(name="global")

    def configure_services(self) -> None:
        self.register_singleton(LoggingConfigurer, DefaultLoggingConfigurer, lazy=False)
        self.register_singleton(StartParameterConverter, DefaultStartParameterConverter, lazy=False)
        self.register_singleton(CacheFactory, DefaultCacheFactory, lazy=False)

    def get_logging_configurer(self) -> LoggingConfigurer:
        """Get logging configurer"""
        return self.resolve(LoggingConfigurer)

    def get_start_parameter_converter(self) -> StartParameterConverter:
        """Get command-line converter"""
        return self.resolve(StartParameterConverter)

    def get_cache_factory(self) -> CacheFactory:
        """Get cache factory"""
        return self.resolve(CacheFactory)


class BuildServicesRegistry(ScopeServicesRegistry):
    """Services for a single build, layered over the global services."""

    def __init__(self, parent: ServiceRegistry, start_parameter: StartParameter):
        self._start_parameter = start_parameter
        super().__init__(parent, name="build")

    def configure_services(self) -> None:
        self.register_instance(StartParameter, self._start_parameter, owned=False)
        # the cache factory shares caches between builds and closes them itself
        self.register_factory(BuildCache, self._create_build_cache, owned=False)

    def _create_build_cache(self):
        cache_dir = self._start_parameter.cache_dir(config.CACHE_DIR_NAME) / config.BUILD_CACHE_NAME
        properties = {"offline": str(self._start_parameter.offline).lower()}
        return self.resolve(CacheFactory).open(cache_dir, properties)

    def get_start_parameter(self) -> StartParameter:
        """Get start parameter"""
        return self.resolve(StartParameter)

    def get_build_cache(self) -> BuildCache:
        """Get build cache"""
        return self.resolve(BuildCache)


def create_build_services(global_services: ServiceRegistry, args: Sequence[str]) -> BuildServicesRegistry:
    """Parse args, apply their log level and open the build scope"""
    start_parameter = global_services.resolve(StartParameterConverter).convert(args)
    global_services.resolve(LoggingConfigurer).configure(start_parameter.log_level)
    return BuildServicesRegistry(global_services, start_parameter)
