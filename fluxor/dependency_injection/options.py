"""
Options - the scan configuration built before discovery runs.

Holds which modules to scan, which middleware types are known, and the
registration strategy every discovered service is registered with.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Type

from ..di.services import ServiceCollection
from ..faults import MiddlewareTypeFault, ScanTargetMissingFault
from ..middleware import Middleware
from .registration import (
    RegistrationSink,
    ScopedRegistration,
    SingletonRegistration,
    registration_for,
)
from .scan_settings import ModuleRef, ScanTarget

if TYPE_CHECKING:
    from ..config import FluxorConfig

logger = logging.getLogger("fluxor.options")


class Options:
    """
    Configures effect/reducer discovery.

    Example:
        options = Options(services)
        options.scan_assemblies(my_app.store).add_middleware(LoggingMiddleware)
        options.use_singleton_registration()

    Scan targets are kept most-recently-added first and are not
    deduplicated. A module or namespace that contains nothing simply
    produces empty discovery results, so a typo here fails silently.
    """

    def __init__(self, services: ServiceCollection):
        self.services = services
        self._assemblies_to_scan: Tuple[ScanTarget, ...] = ()
        self._middleware_types: Tuple[Type[Middleware], ...] = ()
        self._registration: RegistrationSink = ScopedRegistration(services)

    @property
    def assemblies_to_scan(self) -> Tuple[ScanTarget, ...]:
        return self._assemblies_to_scan

    @property
    def middleware_types(self) -> Tuple[Type[Middleware], ...]:
        return self._middleware_types

    @property
    def registration(self) -> RegistrationSink:
        return self._registration

    @property
    def registration_scope(self) -> str:
        return self._registration.scope

    # ------------------------------------------------------------------
    # Scan targets
    # ------------------------------------------------------------------

    def scan_assemblies(self, module: Optional[ModuleRef], *additional: ModuleRef) -> Options:
        """
        Add modules to scan for effects and reducers.

        New targets take precedence over (come before) existing ones.

        Raises:
            ScanTargetMissingFault: If ``module`` is None
        """
        if module is None:
            raise ScanTargetMissingFault("module")

        new_targets = [ScanTarget(m) for m in (module, *additional) if m is not None]
        self._assemblies_to_scan = tuple(new_targets) + self._assemblies_to_scan
        logger.debug(f"Scan targets added: {new_targets}")
        return self

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_service(
        self,
        service_type: Type,
        implementation_type: Optional[Type] = None,
        *,
        factory: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        """
        Register a service using the active registration strategy.

        - ``register_service(T)`` registers T as itself
        - ``register_service(T, Impl)`` resolves T by building Impl
        - ``register_service(T, factory=f)`` resolves T by calling f(container)

        Errors raised by the container (e.g. conflicting registrations)
        propagate unchanged.
        """
        if implementation_type is not None and factory is not None:
            raise TypeError("Pass either implementation_type or factory, not both")

        if factory is not None:
            self._registration.by_factory(service_type, factory)
        elif implementation_type is not None:
            self._registration.by_type_and_implementation(service_type, implementation_type)
        else:
            self._registration.by_type(service_type)

    def add_middleware(self, middleware_type: Type[Middleware]) -> Options:
        """
        Register a middleware type and scan its package.

        Adding the same type again is a no-op.

        Raises:
            MiddlewareTypeFault: If the type is not a Middleware subclass
        """
        if middleware_type in self._middleware_types:
            return self

        if not isinstance(middleware_type, type) or not issubclass(middleware_type, Middleware):
            raise MiddlewareTypeFault(middleware_type)

        self.register_service(middleware_type)

        module_name = middleware_type.__module__
        defining_module = sys.modules.get(module_name)
        namespace = getattr(defining_module, "__package__", None) or module_name
        target = ScanTarget(module_name.partition(".")[0], namespace)

        self._assemblies_to_scan = self._assemblies_to_scan + (target,)
        self._middleware_types = self._middleware_types + (middleware_type,)
        logger.debug(f"Middleware {middleware_type.__qualname__} added, scanning {target}")
        return self

    # ------------------------------------------------------------------
    # Registration strategy
    # ------------------------------------------------------------------

    def use_scoped_registration(self) -> Options:
        """Register discovered services once per request scope."""
        return self.use_registration(ScopedRegistration(self.services))

    def use_singleton_registration(self) -> Options:
        """Register discovered services once per process."""
        return self.use_registration(SingletonRegistration(self.services))

    def use_registration(self, sink: RegistrationSink) -> Options:
        """Install a custom registration strategy."""
        self._registration = sink
        logger.debug(f"Registration strategy set to {sink!r}")
        return self

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def apply_config(self, config: FluxorConfig) -> Options:
        """Apply lifetime and scan modules from a loaded ``FluxorConfig``."""
        self.use_registration(registration_for(self.services, config.lifetime))
        if config.scan_modules:
            self.scan_assemblies(*config.scan_modules)
        return self

    def __repr__(self) -> str:
        return (
            f"Options(scope={self.registration_scope!r}, "
            f"targets={len(self._assemblies_to_scan)}, "
            f"middleware={len(self._middleware_types)})"
        )
