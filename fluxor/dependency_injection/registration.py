"""
Registration sinks - where "register this service" ends up.

Exactly one sink is active on an ``Options`` instance. Switching lifetime
replaces the sink object, so the three entry points always move together.
"""

from typing import Any, Callable, Protocol, Type, runtime_checkable

from ..di.core import Container
from ..di.scopes import ServiceScope
from ..di.services import ServiceCollection


Factory = Callable[[Container], Any]


@runtime_checkable
class RegistrationSink(Protocol):
    """The three registration capabilities a strategy must provide."""

    @property
    def scope(self) -> str:
        """Lifetime name used for every registration."""
        ...

    def by_type(self, service_type: Type) -> None:
        ...

    def by_type_and_implementation(self, service_type: Type, implementation_type: Type) -> None:
        ...

    def by_factory(self, service_type: Type, factory: Factory) -> None:
        ...


class _LifetimeRegistration:
    """Routes every capability to ``services.add(..., scope)``."""

    lifetime: ServiceScope

    def __init__(self, services: ServiceCollection):
        self.services = services

    @property
    def scope(self) -> str:
        return self.lifetime.value

    def by_type(self, service_type: Type) -> None:
        self.services.add(service_type, self.lifetime)

    def by_type_and_implementation(self, service_type: Type, implementation_type: Type) -> None:
        self.services.add(service_type, self.lifetime, implementation_type)

    def by_factory(self, service_type: Type, factory: Factory) -> None:
        self.services.add(service_type, self.lifetime, factory=factory)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scope={self.scope!r})"


class ScopedRegistration(_LifetimeRegistration):
    """One instance per request scope."""

    lifetime = ServiceScope.REQUEST


class SingletonRegistration(_LifetimeRegistration):
    """One instance for the whole process."""

    lifetime = ServiceScope.SINGLETON


def registration_for(services: ServiceCollection, lifetime: "str | ServiceScope") -> RegistrationSink:
    """
    Build the sink for a lifetime name ("scoped"/"request" or "singleton").

    Raises:
        ValueError: If the lifetime has no registration strategy
    """
    from ..di.scopes import normalize_scope

    name = normalize_scope(lifetime)
    if name == ServiceScope.REQUEST.value:
        return ScopedRegistration(services)
    if name == ServiceScope.SINGLETON.value:
        return SingletonRegistration(services)
    raise ValueError(f"No registration strategy for lifetime '{lifetime}'")
