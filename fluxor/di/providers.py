"""
Provider implementations for different instantiation strategies.
"""

from typing import Any, Callable, Type, Optional, Dict, TypeVar
import inspect

from .core import ProviderMeta, ResolveCtx, token_key
from .errors import DIError, ScopeViolationError
from .scopes import SCOPES


T = TypeVar("T")


def _source_line(obj: Any) -> Optional[int]:
    try:
        _, line = inspect.getsourcelines(obj)
    except (TypeError, OSError):
        return None
    return line


class ClassProvider:
    """
    Provider that instantiates a class by resolving constructor dependencies.

    The class may be registered under its own token or under the token of
    a service type it implements (``token=``). Constructor annotations are
    read on first instantiation, so registering a class never fails
    because of its ``__init__``.
    """

    __slots__ = ("_meta", "_cls", "_dependencies")

    def __init__(
        self,
        cls: Type[T],
        scope: str = "singleton",
        token: Optional[Type | str] = None,
    ):
        self._cls = cls
        self._dependencies: Optional[Dict[str, Dict[str, Any]]] = None

        self._meta = ProviderMeta(
            name=cls.__name__,
            token=token_key(token if token is not None else cls),
            scope=scope,
            module=cls.__module__,
            qualname=cls.__qualname__,
            line=_source_line(cls),
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    @property
    def cls(self) -> Type:
        return self._cls

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ClassProvider):
            return NotImplemented
        return (
            self._cls is other._cls
            and self._meta.token == other._meta.token
            and self._meta.scope == other._meta.scope
        )

    def __hash__(self) -> int:
        return hash((self._cls, self._meta.token, self._meta.scope))

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        """Instantiate class by resolving dependencies."""
        if self._dependencies is None:
            self._dependencies = self._extract_dependencies(self._cls)

        resolved_deps = {}
        for dep_name, dep_info in self._dependencies.items():
            dep_token = dep_info["token"]
            self._check_scope(ctx, dep_token)
            resolved_deps[dep_name] = await ctx.container.resolve_async(
                dep_token,
                optional=dep_info["optional"],
                _ctx=ctx,
            )

        return self._cls(**resolved_deps)

    def _check_scope(self, ctx: ResolveCtx, dep_token: Any) -> None:
        dep_provider = ctx.container.get_provider(dep_token)
        if dep_provider is None:
            return
        provider_scope = SCOPES.get(dep_provider.meta.scope)
        consumer_scope = SCOPES.get(self._meta.scope)
        if provider_scope and consumer_scope and not provider_scope.can_inject_into(consumer_scope):
            raise ScopeViolationError(
                provider_token=dep_provider.meta.token,
                provider_scope=dep_provider.meta.scope,
                consumer_token=self._meta.token,
                consumer_scope=self._meta.scope,
            )

    def _extract_dependencies(self, cls: Type) -> Dict[str, Dict[str, Any]]:
        """
        Extract dependencies from __init__ signature.

        Returns:
            Dict mapping parameter names to dependency info
        """
        deps = {}

        if cls.__init__ is object.__init__:
            return deps

        try:
            sig = inspect.signature(cls.__init__)
        except ValueError:
            return deps

        try:
            type_hints = inspect.get_annotations(cls.__init__, eval_str=True)
        except Exception:
            type_hints = {}

        for param_name, param in sig.parameters.items():
            if param_name in ("self", "cls"):
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            annotation = type_hints.get(param_name, param.annotation)

            if annotation is inspect.Parameter.empty:
                # If default value exists, it's optional and we skip dependency injection
                if param.default is not inspect.Parameter.empty:
                    continue

                raise DIError(
                    f"Missing type annotation for parameter '{param_name}' "
                    f"in {cls.__qualname__}.__init__"
                )

            deps[param_name] = {
                "token": annotation,
                "optional": param.default is not inspect.Parameter.empty,
            }

        return deps


class FactoryProvider:
    """
    Provider that calls a factory function to produce instances.

    The factory receives the resolving container, mirroring a
    service-provider callback. Supports both sync and async factories.
    """

    __slots__ = ("_meta", "_factory", "_is_async")

    def __init__(
        self,
        factory: Callable[[Any], Any],
        token: Type | str,
        scope: str = "singleton",
        name: Optional[str] = None,
    ):
        self._factory = factory
        self._is_async = inspect.iscoroutinefunction(factory)

        self._meta = ProviderMeta(
            name=name or getattr(factory, "__name__", "factory"),
            token=token_key(token),
            scope=scope,
            module=getattr(factory, "__module__", "") or "",
            qualname=getattr(factory, "__qualname__", ""),
            line=_source_line(factory),
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        """Call factory with the resolving container."""
        if self._is_async:
            return await self._factory(ctx.container)
        return self._factory(ctx.container)


class ValueProvider:
    """Provider that returns a pre-bound constant value."""

    __slots__ = ("_meta", "_value")

    def __init__(
        self,
        value: Any,
        token: Type | str,
        name: Optional[str] = None,
        scope: str = "singleton",
    ):
        self._value = value
        self._meta = ProviderMeta(
            name=name or "value",
            token=token_key(token),
            scope=scope,
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        return self._value
