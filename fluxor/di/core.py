"""
Core DI types and protocols.

Defines the fundamental contracts for the DI system.
"""

from typing import (
    Any,
    Callable,
    Coroutine,
    Type,
    Optional,
    Protocol,
    Dict,
    List,
    TypeVar,
    runtime_checkable,
)
from dataclasses import dataclass
import asyncio
import inspect
import logging

logger = logging.getLogger("fluxor.di")

# Module-level cache: type → "module.qualname" string
_type_key_cache: Dict[type, str] = {}

# Scopes that should cache instances (frozen for O(1) lookup)
_CACHEABLE_SCOPES = frozenset(("singleton", "request"))


T = TypeVar("T")


def token_key(token: Type | str) -> str:
    """Convert a type or string token to its registry key."""
    if isinstance(token, str):
        return token

    if isinstance(token, type):
        key = _type_key_cache.get(token)
        if key is None:
            key = f"{token.__module__}.{token.__qualname__}"
            _type_key_cache[token] = key
        return key

    # Handle typing generics
    return str(token)


@dataclass(frozen=True, slots=True)
class ProviderMeta:
    """Compact, serializable provider metadata."""
    name: str
    token: str  # Type name or string key
    scope: str  # "singleton", "request", "transient"
    module: str = ""
    qualname: str = ""
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "token": self.token,
            "scope": self.scope,
            "module": self.module,
            "qualname": self.qualname,
            "line": self.line,
        }


class ResolveCtx:
    """
    Context for resolution operations.

    Tracks resolution stack for cycle detection and diagnostics.
    """
    __slots__ = ("container", "stack")

    def __init__(self, container: "Container"):
        self.container = container
        self.stack: List[str] = []

    def push(self, token: str) -> None:
        self.stack.append(token)

    def pop(self) -> None:
        self.stack.pop()

    def in_cycle(self, token: str) -> bool:
        """Check if token is currently being resolved (cycle)."""
        return token in self.stack


@runtime_checkable
class Provider(Protocol):
    """
    Provider protocol - how to instantiate a dependency.

    All providers must implement this interface.
    """

    @property
    def meta(self) -> ProviderMeta:
        """Provider metadata."""
        ...

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        """
        Instantiate the provider.

        Args:
            ctx: Resolution context with container and stack

        Returns:
            The instantiated object
        """
        ...


class Container:
    """
    DI Container - manages provider instances and scopes.

    The root container owns singletons; ``create_request_scope()`` hands out
    cheap children that cache request-scoped instances and delegate
    singletons back to the root.
    """

    __slots__ = (
        "_providers",
        "_cache",
        "_scope",
        "_parent",
        "_finalizers",
        "_diagnostics",
    )

    def __init__(
        self,
        scope: str = "singleton",
        parent: Optional["Container"] = None,
        diagnostics: Optional[Any] = None,
    ):
        from .diagnostics import DIDiagnostics

        self._providers: Dict[str, Provider] = {}  # {cache_key: provider}
        self._cache: Dict[str, Any] = {}  # {cache_key: instance}
        self._scope = scope
        self._parent = parent
        self._finalizers: List[Callable[[], Coroutine]] = []  # LIFO cleanup
        self._diagnostics = diagnostics or DIDiagnostics()

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def diagnostics(self):
        return self._diagnostics

    def register(self, provider: Provider, tag: Optional[str] = None) -> None:
        """
        Register a provider.

        Args:
            provider: Provider instance
            tag: Optional tag for disambiguation

        Raises:
            ProviderConflictError: A different provider owns the token
        """
        meta = provider.meta
        token = meta.token
        key = self._make_cache_key(token, tag)

        if key in self._providers:
            existing = self._providers[key]
            # Idempotency: if same provider, ignore. If different, error.
            if existing == provider:
                return
            from .errors import ProviderConflictError
            raise ProviderConflictError(
                token=token,
                tag=tag,
                existing=existing.meta.name,
                existing_scope=existing.meta.scope,
                incoming=meta.name,
                incoming_scope=meta.scope,
            )

        self._providers[key] = provider

        from .diagnostics import DIEventType
        self._diagnostics.emit(
            DIEventType.REGISTRATION,
            token=token,
            tag=tag,
            provider_name=meta.name,
            metadata={"scope": meta.scope},
        )

    def get_provider(self, token: Type | str, tag: Optional[str] = None) -> Optional[Provider]:
        """Return the provider registered for ``token`` (or None)."""
        return self._lookup_provider(token_key(token), tag)

    def is_registered(self, token: Type | str, tag: Optional[str] = None) -> bool:
        """Check if a provider is registered for the token."""
        return self.get_provider(token, tag) is not None

    def resolve(
        self,
        token: Type[T] | str,
        *,
        tag: Optional[str] = None,
        optional: bool = False,
    ) -> T:
        """
        Resolve a dependency from synchronous code.

        Raises:
            RuntimeError: If called while an event loop is running
            ProviderNotFoundError: If provider not found and not optional
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.resolve_async(token, tag=tag, optional=optional))
        raise RuntimeError(
            "resolve() called from async context; use await resolve_async() instead"
        )

    async def resolve_async(
        self,
        token: Type[T] | str,
        *,
        tag: Optional[str] = None,
        optional: bool = False,
        _ctx: Optional[ResolveCtx] = None,
    ) -> T:
        """Async resolve (primary resolution path)."""
        key = token_key(token)
        cache_key = self._make_cache_key(key, tag)

        # Fast path: check cache
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        provider = self._lookup_provider(key, tag)

        if provider is None:
            if optional:
                return None
            self._raise_not_found(key, tag)

        # Scope delegation: singleton → root
        if self._parent and provider.meta.scope == "singleton":
            return await self._parent.resolve_async(token, tag=tag, optional=optional, _ctx=_ctx)

        ctx = _ctx or ResolveCtx(container=self)
        if ctx.in_cycle(cache_key):
            from .errors import DIError
            raise DIError(
                "Detected dependency cycle: " + " -> ".join(ctx.stack + [cache_key])
            )
        ctx.push(cache_key)

        try:
            instance = await provider.instantiate(ctx)

            if provider.meta.scope in _CACHEABLE_SCOPES:
                self._cache[cache_key] = instance
                if hasattr(instance, "__aexit__") or hasattr(instance, "shutdown"):
                    self._register_finalizer(instance)

            from .diagnostics import DIEventType
            self._diagnostics.emit(DIEventType.RESOLUTION_SUCCESS, token=key, tag=tag)
            return instance
        finally:
            ctx.pop()

    def create_request_scope(self) -> "Container":
        """Create a request-scoped child container (very cheap)."""
        child = Container.__new__(Container)
        child._providers = self._providers  # Share by reference
        child._cache = {}  # Fresh cache per request
        child._scope = "request"
        child._parent = self
        child._finalizers = []
        child._diagnostics = self._diagnostics
        return child

    async def shutdown(self) -> None:
        """Shutdown container - run finalizers in LIFO order."""
        if self._scope == "request" and not self._finalizers and not self._cache:
            return

        from .diagnostics import DIEventType
        self._diagnostics.emit(DIEventType.LIFECYCLE_SHUTDOWN, metadata={"scope": self._scope})

        for finalizer in reversed(self._finalizers):
            try:
                await finalizer()
            except Exception as e:
                logger.error(f"Error during finalizer: {e}")

        self._finalizers.clear()
        self._cache.clear()

    def _make_cache_key(self, token: str, tag: Optional[str]) -> str:
        if tag:
            return f"{token}#{tag}"
        return token

    def _lookup_provider(
        self,
        token: str,
        tag: Optional[str],
    ) -> Optional[Provider]:
        """Lookup provider in current container or parent."""
        key = self._make_cache_key(token, tag)
        if key in self._providers:
            return self._providers[key]

        if self._parent:
            return self._parent._lookup_provider(token, tag)

        return None

    def _register_finalizer(self, instance: Any) -> None:
        if hasattr(instance, "__aexit__"):
            self._finalizers.append(
                lambda: instance.__aexit__(None, None, None)
            )
        elif inspect.iscoroutinefunction(instance.shutdown):
            self._finalizers.append(instance.shutdown)

    def _raise_not_found(self, token: str, tag: Optional[str]) -> None:
        """Raise ProviderNotFoundError with helpful diagnostics."""
        from .errors import ProviderNotFoundError

        short_name = token.rsplit(".", 1)[-1]
        candidates = [key for key in self._providers if short_name in key]

        raise ProviderNotFoundError(
            token=token,
            tag=tag,
            candidates=candidates,
        )
