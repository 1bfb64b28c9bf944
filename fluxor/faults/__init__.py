"""
FluxorFaults - Structured fault signals.

Faults raised by fluxor are typed values carrying a stable code, a domain
and a severity, so the hosting application can log and report them
without string matching.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain enumeration
- Severity: Severity levels
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    DiscoveryFault,
    ScanTargetMissingFault,
    MiddlewareTypeFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "DiscoveryFault",
    "ScanTargetMissingFault",
    "MiddlewareTypeFault",
]
