"""
Service collection - the registration surface handed to discovery.

Offers the three registration primitives (by type, by type with an
implementation, by factory) for each lifetime, and builds providers on a
root ``Container`` as registrations arrive.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Type
import logging

from .core import Container, token_key
from .providers import ClassProvider, FactoryProvider, ValueProvider
from .scopes import ServiceScope, normalize_scope

logger = logging.getLogger("fluxor.di.services")


@dataclass(frozen=True)
class ServiceDescriptor:
    """One registration: service token, lifetime and how to build it."""
    service_type: Any
    scope: str
    implementation_type: Optional[Type] = None
    factory: Optional[Callable[[Container], Any]] = None
    instance: Any = None

    @property
    def token(self) -> str:
        return token_key(self.service_type)


class ServiceCollection:
    """
    Ordered collection of service registrations backed by a root container.

    Registering the same descriptor twice is a no-op. Registering a
    different provider for an already-registered token raises
    ``ProviderConflictError`` from the container.

    Example:
        services = ServiceCollection()
        services.add_scoped(UserEffects)
        services.add_singleton(Clock, SystemClock)
        services.add_singleton(Settings, factory=lambda c: Settings.load())
    """

    def __init__(self, container: Optional[Container] = None):
        self._container = container or Container(scope="singleton")
        self._descriptors: List[ServiceDescriptor] = []

    @property
    def descriptors(self) -> tuple[ServiceDescriptor, ...]:
        return tuple(self._descriptors)

    def add(
        self,
        service_type: Any,
        scope: "str | ServiceScope",
        implementation_type: Optional[Type] = None,
        *,
        factory: Optional[Callable[[Container], Any]] = None,
    ) -> "ServiceCollection":
        """
        Register ``service_type`` with the given lifetime.

        Args:
            service_type: Token the service is resolved by
            scope: Lifetime name (singleton, request/scoped, transient)
            implementation_type: Concrete class to build (defaults to service_type)
            factory: Callable receiving the container and returning the instance

        Raises:
            TypeError: If both implementation_type and factory are given
            ProviderConflictError: If another provider owns the token
        """
        if implementation_type is not None and factory is not None:
            raise TypeError("Pass either implementation_type or factory, not both")

        scope = normalize_scope(scope)
        descriptor = ServiceDescriptor(
            service_type=service_type,
            scope=scope,
            implementation_type=implementation_type,
            factory=factory,
        )
        if descriptor in self._descriptors:
            logger.debug(f"Service {descriptor.token} already registered as {scope}")
            return self

        if factory is not None:
            provider = FactoryProvider(factory, token=service_type, scope=scope)
        else:
            provider = ClassProvider(
                implementation_type or service_type,
                scope=scope,
                token=service_type,
            )

        self._container.register(provider)
        self._descriptors.append(descriptor)
        logger.debug(f"Registered {descriptor.token} ({scope}) -> {provider.meta.name}")
        return self

    def add_scoped(
        self,
        service_type: Any,
        implementation_type: Optional[Type] = None,
        *,
        factory: Optional[Callable[[Container], Any]] = None,
    ) -> "ServiceCollection":
        """Register one instance per request scope."""
        return self.add(service_type, ServiceScope.REQUEST, implementation_type, factory=factory)

    def add_singleton(
        self,
        service_type: Any,
        implementation_type: Optional[Type] = None,
        *,
        factory: Optional[Callable[[Container], Any]] = None,
    ) -> "ServiceCollection":
        """Register one instance for the whole process."""
        return self.add(service_type, ServiceScope.SINGLETON, implementation_type, factory=factory)

    def add_transient(
        self,
        service_type: Any,
        implementation_type: Optional[Type] = None,
        *,
        factory: Optional[Callable[[Container], Any]] = None,
    ) -> "ServiceCollection":
        """Register a fresh instance per resolve."""
        return self.add(service_type, ServiceScope.TRANSIENT, implementation_type, factory=factory)

    def add_instance(self, service_type: Any, instance: Any) -> "ServiceCollection":
        """Register a pre-built value as a singleton."""
        descriptor = ServiceDescriptor(
            service_type=service_type,
            scope=ServiceScope.SINGLETON.value,
            instance=instance,
        )
        self._container.register(ValueProvider(instance, token=service_type, name=descriptor.token))
        self._descriptors.append(descriptor)
        return self

    def get_descriptor(self, service_type: Any) -> Optional[ServiceDescriptor]:
        """Return the registration for ``service_type`` (or None)."""
        key = token_key(service_type)
        for descriptor in self._descriptors:
            if descriptor.token == key:
                return descriptor
        return None

    def build_container(self) -> Container:
        """Return the root container holding every registration."""
        return self._container

    def __contains__(self, service_type: Any) -> bool:
        return self.get_descriptor(service_type) is not None

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)
