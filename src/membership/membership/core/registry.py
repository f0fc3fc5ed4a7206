from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Type, TypeVar

T = TypeVar("T")

Factory = Callable[["ServiceRegistry"], Any]


class ServiceRegistry:
    """Small service locator keyed by contract type.

    Built once at startup (see ``container.build_container``) and passed to
    whoever needs it. Factories receive the registry so they can resolve
    their own dependencies.
    """

    def __init__(self) -> None:
        self._factories: Dict[type, Factory] = {}
        self._singletons: Dict[type, bool] = {}
        self._instances: Dict[type, Any] = {}
        self._lock = threading.RLock()

    def register(self, contract: type, factory: Factory, *, singleton: bool = True) -> "ServiceRegistry":
        with self._lock:
            self._factories[contract] = factory
            self._singletons[contract] = singleton
            self._instances.pop(contract, None)
        return self

    def register_instance(self, contract: type, instance: Any) -> "ServiceRegistry":
        with self._lock:
            self._factories[contract] = lambda _registry: instance
            self._singletons[contract] = True
            self._instances[contract] = instance
        return self

    def auto_register(self, contract: type, factory: Factory, *, singleton: bool = True) -> "ServiceRegistry":
        """Bind ``contract`` only if nothing is bound yet."""
        with self._lock:
            if contract not in self._factories:
                self.register(contract, factory, singleton=singleton)
        return self

    def is_registered(self, contract: type) -> bool:
        return contract in self._factories

    def __contains__(self, contract: type) -> bool:
        return self.is_registered(contract)

    def resolve(self, contract: Type[T]) -> Optional[T]:
        factory = self._factories.get(contract)
        if factory is None:
            return None

        if not self._singletons.get(contract, True):
            return factory(self)

        instance = self._instances.get(contract)
        if instance is not None:
            return instance

        with self._lock:
            instance = self._instances.get(contract)
            if instance is None:
                instance = factory(self)
                self._instances[contract] = instance
            return instance
