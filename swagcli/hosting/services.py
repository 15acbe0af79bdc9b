"""
Minimal service registry for web hosts.

Applications register the services a host needs in a ``ServiceCollection``
(typically from their ``Startup.configure_services``); the host exposes them
through a ``ServiceProvider``. Keys are usually the abstract type a service
implements, e.g. ``SwaggerProvider``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

from ..exceptions import ServiceNotRegisteredError

T = TypeVar("T")


class ServiceCollection:
    """
    Mutable set of service registrations.

    Example:
        services = ServiceCollection()
        services.add_singleton(SwaggerProvider, provider)
        services.add_factory(Clock, lambda sp: SystemClock())
        sp = services.build_service_provider()
    """

    def __init__(self) -> None:
        self._instances: dict[Any, Any] = {}
        self._factories: dict[Any, Callable[[ServiceProvider], Any]] = {}

    def add_singleton(self, key: Any, instance: Any) -> ServiceCollection:
        """Register an already-built service instance."""
        self._factories.pop(key, None)
        self._instances[key] = instance
        return self

    def add_factory(
        self, key: Any, factory: Callable[[ServiceProvider], Any]
    ) -> ServiceCollection:
        """Register a factory called once, on first resolution."""
        self._instances.pop(key, None)
        self._factories[key] = factory
        return self

    def find_instance(self, key: Any) -> Any | None:
        """Return the instance registered with add_singleton(), or None."""
        return self._instances.get(key)

    def __contains__(self, key: Any) -> bool:
        return key in self._instances or key in self._factories

    def __len__(self) -> int:
        return len(self._instances) + len(self._factories)

    def build_service_provider(self) -> ServiceProvider:
        """Freeze the registrations into a provider."""
        return ServiceProvider(dict(self._instances), dict(self._factories))


class ServiceProvider:
    """Resolves registered services; factories run at most once."""

    def __init__(
        self,
        instances: dict[Any, Any],
        factories: dict[Any, Callable[[ServiceProvider], Any]],
    ) -> None:
        self._instances = instances
        self._factories = factories
        self._created: list[Any] = []
        self._closed = False

    def get_service(self, key: type[T] | Any) -> T | None:
        """Return the service registered for key, or None."""
        if key in self._instances:
            return cast(T, self._instances[key])
        factory = self._factories.pop(key, None)
        if factory is None:
            return None
        instance = factory(self)
        self._instances[key] = instance
        self._created.append(instance)
        return cast(T, instance)

    def get_required_service(self, key: type[T] | Any) -> T:
        """
        Return the service registered for key.

        Raises:
            ServiceNotRegisteredError: If nothing is registered for key
        """
        service = self.get_service(key)
        if service is None:
            raise ServiceNotRegisteredError(key)
        return service

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close services this provider created that expose a close() method."""
        if self._closed:
            return
        self._closed = True
        for instance in reversed(self._created):
            close = getattr(instance, "close", None)
            if callable(close):
                close()
        self._created.clear()
