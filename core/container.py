"""
Service registry: type-indexed singleton container with parent scopes
"""
from abc import ABC, abstractmethod
from typing import Dict, Type, TypeVar, Callable, Any, Optional, List
import logging
import threading

from domain.enums import RegistryState
from .exceptions import (
    describe_key,
    ServiceKeyError,
    DuplicateBindingError,
    UnknownServiceError,
    CyclicResolutionError,
    RegistryStateError,
    BindingConstructionError,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Registry errors raised inside a factory are not wrapped again
_PASSTHROUGH_ERRORS = (ServiceKeyError, RegistryStateError)

_local = threading.local()


def _resolution_stack() -> List[tuple]:
    """Bindings currently being instantiated on this thread"""
    stack = getattr(_local, 'stack', None)
    if stack is None:
        stack = _local.stack = []
    return stack


class Binding(ABC):
    """Association of a service key with an instance or a factory"""

    def __init__(self, owned: bool = True):
        self.owned = owned
        self.owner: Optional['ServiceRegistry'] = None
        self._instance: Any = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        """True once the instance exists"""
        return self._resolved

    @property
    def instance(self) -> Any:
        """Resolved instance, or None"""
        return self._instance if self._resolved else None

    def settle(self) -> Any:
        """Resolved instance once no instantiation is in flight, or None"""
        return self.instance

    @abstractmethod
    def get(self, key: Any) -> Any:
        """Return the bound instance, creating it if needed"""
        ...


class InstanceBinding(Binding):
    """Eager binding to an already constructed instance"""

    def __init__(self, instance: Any, owned: bool = True):
        super().__init__(owned)
        self._instance = instance
        self._resolved = True

    def get(self, key: Any) -> Any:
        return self._instance

    def __repr__(self) -> str:
        return f"InstanceBinding({type(self._instance).__name__})"


class FactoryBinding(Binding):
    """Lazy binding; the factory runs once, on first resolve"""

    def __init__(self, factory: Callable[[], Any], owned: bool = True):
        if not callable(factory):
            raise TypeError(f"Factory must be callable, got {factory!r}")
        super().__init__(owned)
        self._factory = factory
        self._lock = threading.Lock()

    def _in_flight_here(self) -> bool:
        return any(binding is self for binding, _ in _resolution_stack())

    def get(self, key: Any) -> Any:
        if self._resolved:
            return self._instance

        stack = _resolution_stack()
        if self._in_flight_here():
            raise CyclicResolutionError(key, tuple(k for _, k in stack))

        with self._lock:
            if self._resolved:
                return self._instance

            stack.append((self, key))
            try:
                instance = self._factory()
            except _PASSTHROUGH_ERRORS:
                raise
            except Exception as e:
                raise BindingConstructionError(key, e) from e
            finally:
                stack.pop()

            # owner closed while the factory ran
            owner = self.owner
            if owner is not None and owner.state is RegistryState.CLOSED:
                if self.owned:
                    _close_service(key, instance)
                raise RegistryStateError(
                    f"Registry {owner.name} closed while creating {describe_key(key)}",
                    key
                )

            self._instance = instance
            self._resolved = True
            logger.debug(f"Instantiated service: {describe_key(key)}")
            return instance

    def settle(self) -> Any:
        # a factory closing its own registry would deadlock on the lock
        if self._resolved or self._in_flight_here():
            return self.instance
        with self._lock:
            return self.instance

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"FactoryBinding({self._factory!r}, {state})"


def _close_service(key: Any, instance: Any) -> None:
    closer = getattr(instance, 'close', None)
    if not callable(closer):
        return
    try:
        closer()
    except Exception as e:
        logger.error(f"Failed to close service {describe_key(key)}: {e}")


class ServiceRegistry:
    """Container mapping contract types to singleton service instances.

    A registry starts in the BUILDING state, where bindings may be added from
    a single thread. ``seal()`` makes it read-only; from then on ``resolve``
    may be called from any number of threads. Lookups that miss locally are
    delegated to the parent registry, so a child scope can shadow a parent
    binding without the parent seeing the override.
    """

    def __init__(self, parent: Optional['ServiceRegistry'] = None, name: Optional[str] = None):
        self._parent = parent
        self._name = name or type(self).__name__
        self._bindings: Dict[Any, Binding] = {}
        self._state = RegistryState.BUILDING

    @property
    def parent(self) -> Optional['ServiceRegistry']:
        return self._parent

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_sealed(self) -> bool:
        return self._state is RegistryState.SEALED

    def register(self, key: Any, binding: Binding) -> 'ServiceRegistry':
        """Add a binding for key at this scope level"""
        if not isinstance(binding, Binding):
            raise TypeError(f"Expected a Binding for {describe_key(key)}, got {binding!r}")
        self._check_can_register(key)
        if binding.owner is not None:
            raise ValueError(f"Binding for {describe_key(key)} already belongs to registry {binding.owner.name}")
        binding.owner = self
        self._bindings[key] = binding
        return self

    def _check_can_register(self, key: Any) -> None:
        if self._state is not RegistryState.BUILDING:
            raise RegistryStateError(
                f"Cannot register {describe_key(key)}: registry {self._name} is {self._state.value}",
                key
            )
        if key in self._bindings:
            raise DuplicateBindingError(key)

    def register_instance(self, interface: Type[T], instance: T, owned: bool = True) -> 'ServiceRegistry':
        """Register service instance"""
        return self.register(interface, InstanceBinding(instance, owned))

    def register_factory(self, interface: Type[T], factory: Callable[[], T], owned: bool = True) -> 'ServiceRegistry':
        """Register factory for service"""
        return self.register(interface, FactoryBinding(factory, owned))

    def register_singleton(self, interface: Type[T], implementation: Type[T], lazy: bool = True,
                           owned: bool = True) -> 'ServiceRegistry':
        """Register implementation class, constructed on first use or right away"""
        if lazy:
            return self.register(interface, FactoryBinding(implementation, owned))
        # a conflicting key must not construct a throwaway instance
        self._check_can_register(interface)
        try:
            instance = implementation()
        except Exception as e:
            raise BindingConstructionError(interface, e) from e
        return self.register(interface, InstanceBinding(instance, owned))

    def resolve(self, key: Type[T]) -> T:
        """Get service instance from this scope or the nearest ancestor"""
        if self._state is RegistryState.CLOSED:
            raise RegistryStateError(
                f"Cannot resolve {describe_key(key)}: registry {self._name} is closed",
                key
            )
        binding = self._bindings.get(key)
        if binding is not None:
            return binding.get(key)
        if self._parent is not None:
            return self._parent.resolve(key)
        raise UnknownServiceError(key)

    get = resolve

    def find(self, key: Type[T], default: Optional[T] = None) -> Optional[T]:
        """Resolve key, or return default when it is bound nowhere"""
        try:
            return self.resolve(key)
        except UnknownServiceError as e:
            # a factory missing one of its own dependencies is still an error
            if e.key != key:
                raise
            return default

    def resolve_all(self, capability: Any) -> List[Any]:
        """All instances bound under capability, parent scopes first.

        A binding matches when its key is the capability itself or a subclass
        of it. Each level contributes in registration order, and a level
        shadowed by a child still contributes its own instance.
        """
        if self._state is RegistryState.CLOSED:
            raise RegistryStateError(f"Cannot resolve from closed registry {self._name}", capability)
        instances = []
        if self._parent is not None:
            instances.extend(self._parent.resolve_all(capability))
        for key, binding in list(self._bindings.items()):
            if _provides(key, capability):
                instances.append(binding.get(key))
        return instances

    def has(self, key: Any) -> bool:
        """Check key is bound here or in any ancestor"""
        registry = self
        while registry is not None:
            if key in registry._bindings:
                return True
            registry = registry._parent
        return False

    __contains__ = has

    def keys(self) -> List[Any]:
        """Keys bound at this level, in registration order"""
        return list(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def seal(self) -> 'ServiceRegistry':
        """Stop accepting bindings"""
        if self._state is RegistryState.CLOSED:
            raise RegistryStateError(f"Cannot seal closed registry {self._name}")
        self._state = RegistryState.SEALED
        return self

    def close(self) -> None:
        """Release owned services in reverse registration order.

        Every service is given the chance to close; the first failure is
        re-raised once all of them have been visited. The parent is left
        untouched. A factory still running on another thread is waited for;
        one that finishes after the state change releases its own instance.
        """
        if self._state is RegistryState.CLOSED:
            return
        self._state = RegistryState.CLOSED
        logger.debug(f"Closing registry {self._name} ({len(self._bindings)} bindings)")

        first_error: Optional[Exception] = None
        closed = set()
        for key, binding in reversed(list(self._bindings.items())):
            if not binding.owned:
                continue
            instance = binding.settle()
            if instance is None or id(instance) in closed:
                continue
            closer = getattr(instance, 'close', None)
            if not callable(closer):
                continue
            closed.add(id(instance))
            try:
                closer()
            except Exception as e:
                logger.error(f"Failed to close service {describe_key(key)}: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __enter__(self) -> 'ServiceRegistry':
        if self._state is RegistryState.BUILDING:
            self.seal()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name} {self._state.value} bindings={len(self._bindings)}>"


def _provides(key: Any, capability: Any) -> bool:
    if key is capability or key == capability:
        return True
    if isinstance(key, type) and isinstance(capability, type):
        try:
            return issubclass(key, capability)
        except TypeError:
            # non-runtime Protocols refuse issubclass
            return False
    return False
