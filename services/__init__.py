"""
Default service implementations
"""
from .logging_configurer import DefaultLoggingConfigurer
from .start_parameter_converter import DefaultStartParameterConverter
from .cache_factory import DefaultCacheFactory, PersistentCache

__all__ = [
    'DefaultLoggingConfigurer',
    'DefaultStartParameterConverter',
    'DefaultCacheFactory',
    'PersistentCache'
]
