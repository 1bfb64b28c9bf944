"""
Effect system - classes that react to dispatched actions with side-effects.

Any class deriving from ``Effect`` is picked up by effect discovery and
registered with the active lifetime. ``EffectWrapper`` adapts a plain
callable into an effect; it is infrastructure and never discovered.
"""

from typing import Any, Awaitable, Callable, Generic, Optional, Type, TypeVar, Union
from abc import ABC, abstractmethod
import inspect


TAction = TypeVar("TAction")

# Class-level flag marking framework plumbing that discovery must skip.
# Only honoured when set in the class body itself, never when inherited.
INFRASTRUCTURE_MARKER = "__fluxor_infrastructure__"


def is_infrastructure(cls: type) -> bool:
    """True when ``cls`` declares itself framework infrastructure."""
    return bool(vars(cls).get(INFRASTRUCTURE_MARKER, False))


class Effect(ABC):
    """
    Base class for effects.

    Example:
        class FetchWeatherEffect(Effect):
            def __init__(self, api: WeatherApi):
                self.api = api

            def should_react_to(self, action) -> bool:
                return isinstance(action, FetchWeather)

            async def handle(self, action, dispatcher):
                forecast = await self.api.get(action.city)
                dispatcher.dispatch(FetchWeatherResult(forecast))
    """

    __fluxor_infrastructure__ = True

    @abstractmethod
    def should_react_to(self, action: Any) -> bool:
        """Return True if this effect handles ``action``."""

    @abstractmethod
    async def handle(self, action: Any, dispatcher: Any) -> None:
        """Run the side-effect for ``action``."""


class EffectWrapper(Effect, Generic[TAction]):
    """
    Adapter turning a callable into an effect for a single action type.

    The callable receives ``(action, dispatcher)`` and may be sync or async.
    """

    __fluxor_infrastructure__ = True

    def __init__(
        self,
        action_type: Optional[Type[TAction]],
        handler: Callable[[TAction, Any], Union[Awaitable[None], None]],
    ):
        self.action_type = action_type
        self.handler = handler

    def should_react_to(self, action: Any) -> bool:
        if self.action_type is None:
            return True
        return isinstance(action, self.action_type)

    async def handle(self, action: TAction, dispatcher: Any) -> None:
        result = self.handler(action, dispatcher)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        name = getattr(self.action_type, "__name__", "*")
        return f"EffectWrapper({name} -> {getattr(self.handler, '__qualname__', self.handler)!r})"
