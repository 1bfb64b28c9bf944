"""
Fluxor - effect and reducer discovery for dependency-injected state stores.

Scans application modules for:
- Effects: classes deriving from ``Effect``
- Reducers: methods tagged with ``@reducer_method``

and registers them (plus any configured middleware) into a
``ServiceCollection`` with a scoped or singleton lifetime.
"""

__version__ = "0.3.0"

from .effects import Effect, EffectWrapper
from .reducers import reducer_method, ReducerMethodMarker, get_reducer_marker
from .middleware import Middleware
from .config import ConfigLoader, FluxorConfig
from .di import Container, ServiceCollection, ServiceScope
from .faults import Fault, ScanTargetMissingFault, MiddlewareTypeFault
from .dependency_injection import (
    Options,
    ScanTarget,
    DiscoveredEffectClass,
    DiscoveredReducerMethod,
    DiscoveryResult,
    add_fluxor,
)

__all__ = [
    "__version__",
    # Markers
    "Effect",
    "EffectWrapper",
    "reducer_method",
    "ReducerMethodMarker",
    "get_reducer_marker",
    "Middleware",
    # Config
    "ConfigLoader",
    "FluxorConfig",
    # DI
    "Container",
    "ServiceCollection",
    "ServiceScope",
    # Faults
    "Fault",
    "ScanTargetMissingFault",
    "MiddlewareTypeFault",
    # Discovery
    "Options",
    "ScanTarget",
    "DiscoveredEffectClass",
    "DiscoveredReducerMethod",
    "DiscoveryResult",
    "add_fluxor",
]
