# Standard library imports
from typing import Any, Callable, Dict, Type, TypeVar

T = TypeVar("T")


class BaseContainer:
    """
    Minimal dependency container.
    
    Singletons are stored as instances, factories are called on every get().
    """
    
    def __init__(self) -> None:
        self._singletons: Dict[type, Any] = {}
        self._factories: Dict[type, Callable[[], Any]] = {}
    
    def register_singleton(self, interface: Type[T], instance: T) -> None:
        """Register a shared instance for an interface"""
        self._singletons[interface] = instance
    
    def register_factory(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory that builds a new instance per lookup"""
        self._factories[interface] = factory
    
    def get(self, interface: Type[T]) -> T:
        """
        Resolve a dependency.
        
        Raises:
            ValueError: If nothing is registered for the interface
        """
        if interface in self._singletons:
            return self._singletons[interface]
        if interface in self._factories:
            return self._factories[interface]()
        raise ValueError(f"No registration found for {interface.__name__}")