"""
FluxorFaults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- DISCOVERY faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault, ValueError):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# DISCOVERY Faults
# ============================================================================

class DiscoveryFault(Fault):
    """Base class for scan configuration and discovery faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.DISCOVERY,
            severity=severity,
            retryable=False,
            metadata=metadata,
        )


class ScanTargetMissingFault(DiscoveryFault, ValueError):
    """A required module to scan was not supplied."""

    def __init__(self, argument: str = "module", **kwargs):
        super().__init__(
            code="SCAN_TARGET_MISSING",
            message=f"Argument '{argument}' is required: a module to scan must be given",
            metadata={"argument": argument, **kwargs.get("metadata", {})},
        )


class MiddlewareTypeFault(DiscoveryFault, TypeError):
    """Type passed to add_middleware() is not a Middleware class."""

    def __init__(self, candidate: Any, **kwargs):
        name = getattr(candidate, "__qualname__", repr(candidate))
        super().__init__(
            code="MIDDLEWARE_TYPE_INVALID",
            message=f"{name} is not a subclass of fluxor.middleware.Middleware",
            metadata={"candidate": name, **kwargs.get("metadata", {})},
        )
