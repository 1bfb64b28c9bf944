"""
Fluxor Dependency Injection

Small async-first DI container that discovered effects, reducer hosts and
middleware are registered into.

Key Features:
- Explicit scopes: singleton, request ("scoped"), transient
- Registration by type, by type with implementation, or by factory
- Request-scope child containers with singleton delegation
- Diagnostic events for registration and resolution
"""

from .core import (
    Provider,
    ProviderMeta,
    Container,
    ResolveCtx,
    token_key,
)

from .providers import (
    ClassProvider,
    FactoryProvider,
    ValueProvider,
)

from .scopes import (
    Scope,
    ServiceScope,
    SCOPES,
    normalize_scope,
)

from .services import (
    ServiceCollection,
    ServiceDescriptor,
)

from .diagnostics import (
    DIDiagnostics,
    DIEvent,
    DIEventType,
    ConsoleDiagnosticListener,
)

from .errors import (
    DIError,
    ProviderNotFoundError,
    ProviderConflictError,
    ScopeViolationError,
)

__all__ = [
    # Core types
    "Provider",
    "ProviderMeta",
    "Container",
    "ResolveCtx",
    "token_key",

    # Providers
    "ClassProvider",
    "FactoryProvider",
    "ValueProvider",

    # Scopes
    "Scope",
    "ServiceScope",
    "SCOPES",
    "normalize_scope",

    # Services
    "ServiceCollection",
    "ServiceDescriptor",

    # Diagnostics
    "DIDiagnostics",
    "DIEvent",
    "DIEventType",
    "ConsoleDiagnosticListener",

    # Errors
    "DIError",
    "ProviderNotFoundError",
    "ProviderConflictError",
    "ScopeViolationError",
]
