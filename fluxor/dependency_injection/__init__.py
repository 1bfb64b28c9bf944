"""
Fluxor dependency injection - effect and reducer discovery.

Pipeline:
    Options (scan targets, middleware, lifetime)
        -> CandidateEnumerator (classes / methods under the targets)
        -> discover_effect_classes / discover_reducer_methods
        -> registrations through the active RegistrationSink
"""

from .scan_settings import ScanTarget
from .discovered import (
    DiscoveredEffectClass,
    DiscoveredReducerMethod,
    TypeAndMethod,
)
from .registration import (
    RegistrationSink,
    ScopedRegistration,
    SingletonRegistration,
    registration_for,
)
from .markers import MarkerInspector, DefaultMarkerInspector
from .options import Options
from .candidates import CandidateEnumerator, declared_methods
from .scanners import discover_effect_classes, discover_reducer_methods
from .bootstrap import add_fluxor, DiscoveryResult, MiddlewareTypes

__all__ = [
    "ScanTarget",
    "DiscoveredEffectClass",
    "DiscoveredReducerMethod",
    "TypeAndMethod",
    "RegistrationSink",
    "ScopedRegistration",
    "SingletonRegistration",
    "registration_for",
    "MarkerInspector",
    "DefaultMarkerInspector",
    "Options",
    "CandidateEnumerator",
    "declared_methods",
    "discover_effect_classes",
    "discover_reducer_methods",
    "add_fluxor",
    "DiscoveryResult",
    "MiddlewareTypes",
]
