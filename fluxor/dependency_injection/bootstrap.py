"""
Bootstrap - configure, enumerate, discover, register.

``add_fluxor`` is the entry point a hosting application calls once at
startup. It returns what was discovered so the application can build its
effect dispatch table and reducer lists.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, Type

from ..di.services import ServiceCollection
from ..middleware import Middleware
from .candidates import CandidateEnumerator
from .discovered import DiscoveredEffectClass, DiscoveredReducerMethod
from .markers import MarkerInspector
from .options import Options
from .scanners import discover_effect_classes, discover_reducer_methods

if TYPE_CHECKING:
    from ..config import FluxorConfig

logger = logging.getLogger("fluxor.discovery")


class MiddlewareTypes(tuple):
    """Service token for the ordered tuple of registered middleware types."""


@dataclass
class DiscoveryResult:
    """Everything one discovery pass found."""
    options: Options
    effects: List[DiscoveredEffectClass] = field(default_factory=list)
    reducers: List[DiscoveredReducerMethod] = field(default_factory=list)

    @property
    def services(self) -> ServiceCollection:
        return self.options.services

    @property
    def effect_types(self) -> List[Type]:
        return [e.implementing_type for e in self.effects]

    @property
    def reducer_host_types(self) -> List[Type]:
        return list(dict.fromkeys(r.host_class_type for r in self.reducers))

    @property
    def middleware_types(self) -> Tuple[Type[Middleware], ...]:
        return self.options.middleware_types


def add_fluxor(
    services: ServiceCollection,
    configure: Optional[Callable[[Options], None]] = None,
    *,
    config: Optional["FluxorConfig"] = None,
    enumerator: Optional[CandidateEnumerator] = None,
    inspector: Optional[MarkerInspector] = None,
) -> DiscoveryResult:
    """
    Run the discovery pipeline and register everything it finds.

    Args:
        services: Collection discovered services are registered into
        configure: Callback adjusting the ``Options`` (targets, middleware, lifetime)
        config: Loaded settings applied before ``configure``
        enumerator: Candidate source (defaults to scanning imported packages)
        inspector: Marker inspector (defaults to fluxor's own markers)

    Example:
        services = ServiceCollection()
        result = add_fluxor(
            services,
            lambda o: o.scan_assemblies("my_app.store").add_middleware(LoggingMiddleware),
        )
        container = services.build_container()
    """
    options = Options(services)
    if config is not None:
        options.apply_config(config)
    if configure is not None:
        configure(options)

    if enumerator is None:
        enumerator = CandidateEnumerator(
            recursive=config.recursive if config else True,
            max_depth=config.max_depth if config else 5,
        )

    targets = options.assemblies_to_scan
    candidate_types, candidate_methods = enumerator.candidates(targets)

    effects = discover_effect_classes(options, candidate_types, inspector)
    reducers = discover_reducer_methods(options, candidate_methods, inspector)

    services.add_instance(MiddlewareTypes, MiddlewareTypes(options.middleware_types))

    logger.info(
        f"Discovery complete: {len(effects)} effect(s), {len(reducers)} reducer(s), "
        f"{len(options.middleware_types)} middleware, "
        f"{len(targets)} scan target(s), registered as {options.registration_scope}"
    )
    return DiscoveryResult(options=options, effects=effects, reducers=reducers)
