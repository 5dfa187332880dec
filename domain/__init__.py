"""
Domain models and value objects
"""
from .value_objects import SystemProperty, TaskName
from .entities import StartParameter
from .enums import LogLevel, RegistryState

__all__ = [
    'SystemProperty',
    'TaskName',
    'StartParameter',
    'LogLevel',
    'RegistryState'
]
