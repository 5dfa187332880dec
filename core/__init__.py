"""
Core module: service registry, contracts and errors
"""
from .container import ServiceRegistry, Binding, InstanceBinding, FactoryBinding
from .exceptions import (
    ServiceRegistryException,
    DuplicateBindingError,
    UnknownServiceError,
    CyclicResolutionError,
    RegistryStateError,
    BindingConstructionError
)
from .interfaces import (
    LoggingConfigurer,
    StartParameterConverter,
    CacheFactory,
    Cache,
    BuildCache
)

__all__ = [
    'ServiceRegistry',
    'Binding',
    'InstanceBinding',
    'FactoryBinding',
    'ServiceRegistryException',
    'DuplicateBindingError',
    'UnknownServiceError',
    'CyclicResolutionError',
    'RegistryStateError',
    'BindingConstructionError',
    'LoggingConfigurer',
    'StartParameterConverter',
    'CacheFactory',
    'Cache',
    'BuildCache'
]
