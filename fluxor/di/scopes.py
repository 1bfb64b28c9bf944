"""
Scope definitions for service lifetimes.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass


class ServiceScope(str, Enum):
    """Service lifetime scopes."""

    SINGLETON = "singleton"  # One instance per process
    REQUEST = "request"      # One instance per request scope ("scoped")
    TRANSIENT = "transient"  # New instance every resolve


@dataclass(frozen=True)
class Scope:
    """Scope metadata and rules."""

    name: str
    cacheable: bool
    parent: Optional[str] = None

    def can_inject_into(self, other: "Scope") -> bool:
        """
        Check if this scope can be injected into another scope.

        Rules:
        - Singleton can inject into anything
        - Request cannot inject into singleton (scope violation)
        - Transient can inject into anything
        """
        if self.name == "request":
            return other.name != "singleton"
        return True


SCOPES = {
    "singleton": Scope(name="singleton", cacheable=True),
    "request": Scope(name="request", cacheable=True, parent="singleton"),
    "transient": Scope(name="transient", cacheable=False),
}

# Friendly aliases accepted wherever a scope name is expected
_ALIASES = {
    "scoped": "request",
    "app": "singleton",
}


def normalize_scope(scope: "str | ServiceScope") -> str:
    """
    Map a scope name or alias onto its canonical name.

    Raises:
        ValueError: If the scope is unknown
    """
    name = scope.value if isinstance(scope, ServiceScope) else str(scope).lower()
    name = _ALIASES.get(name, name)
    if name not in SCOPES:
        raise ValueError(
            f"Unknown service scope '{scope}'. Expected one of: "
            f"{', '.join(sorted(set(SCOPES) | set(_ALIASES)))}"
        )
    return name
