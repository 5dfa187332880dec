"""
Custom exceptions for the service registry
"""
from typing import Any, Optional


def describe_key(key: Any) -> str:
    """Human readable name of a service key"""
    return getattr(key, '__qualname__', None) or getattr(key, '__name__', None) or repr(key)


class ServiceRegistryException(Exception):
    """Base exception for the service registry.

    ``error_code`` names the failure kind; ``key`` is the service key involved,
    or None when the failure is not about one service.
    """

    def __init__(self, message: str, error_code: Optional[str] = None, key: Any = None):
        self.message = message
        self.error_code = error_code
        self.key = key
        super().__init__(self.message)

    @property
    def service_name(self) -> Optional[str]:
        """Readable name of the key, if any"""
        return describe_key(self.key) if self.key is not None else None


class ServiceKeyError(ServiceRegistryException):
    """Error about a specific service key"""

    def __init__(self, key: Any, message: str, error_code: Optional[str] = None):
        super().__init__(message, error_code, key)


class DuplicateBindingError(ServiceKeyError):
    """Key already bound in this scope"""

    def __init__(self, key: Any):
        super().__init__(
            key,
            f"Service {describe_key(key)} is already registered in this scope",
            "duplicate_binding"
        )


class UnknownServiceError(ServiceKeyError):
    """Key not bound anywhere in the scope chain"""

    def __init__(self, key: Any):
        super().__init__(
            key,
            f"Service {describe_key(key)} not registered",
            "unknown_service"
        )


class CyclicResolutionError(ServiceKeyError):
    """Lazy factory re-entered its own unresolved key"""

    def __init__(self, key: Any, path: tuple = ()):
        self.path = tuple(path) + (key,)
        chain = " -> ".join(describe_key(k) for k in self.path)
        super().__init__(
            key,
            f"Cyclic resolution of service {describe_key(key)}: {chain}",
            "cyclic_resolution"
        )


class RegistryStateError(ServiceRegistryException):
    """Operation not allowed in the registry's current state"""

    def __init__(self, message: str, key: Any = None):
        super().__init__(message, "registry_state", key)


class BindingConstructionError(ServiceKeyError):
    """Service constructor or factory failed"""

    def __init__(self, key: Any, cause: BaseException):
        self.cause = cause
        super().__init__(
            key,
            f"Could not create service {describe_key(key)}: {type(cause).__name__}: {cause}",
            "binding_construction"
        )


class CommandLineArgumentError(ServiceRegistryException):
    """Invalid command-line arguments"""

    def __init__(self, message: str):
        super().__init__(message, "command_line")


class CacheError(ServiceRegistryException):
    """Cache error"""
    pass
