"""
Reducer method marker.

``@reducer_method`` tags a function as a reducer so reducer discovery can
find it on its host class. The marker is stored on the function object
itself and is never inherited by overrides.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Type, TypeVar, overload


F = TypeVar("F", bound=Callable[..., Any])

REDUCER_MARKER_ATTR = "__fluxor_reducer__"


@dataclass(frozen=True)
class ReducerMethodMarker:
    """Metadata attached by ``@reducer_method``."""
    action_type: Optional[Type] = None


@overload
def reducer_method(func: F) -> F: ...
@overload
def reducer_method(action_type: Optional[Type] = None) -> Callable[[F], F]: ...


def reducer_method(func_or_action=None):
    """
    Mark a function as a reducer method.

    Usable bare or with the action type it reduces:

        class CounterReducers:
            @staticmethod
            @reducer_method
            def on_increment(state: CounterState, action: Increment) -> CounterState:
                return CounterState(state.count + 1)

            @staticmethod
            @reducer_method(Reset)
            def on_reset(state: CounterState) -> CounterState:
                return CounterState(0)
    """
    def decorator(func: F, action_type: Optional[Type] = None) -> F:
        target = _unwrap(func)
        setattr(target, REDUCER_MARKER_ATTR, ReducerMethodMarker(action_type=action_type))
        return func

    # Bare usage: @reducer_method on a function
    if isinstance(func_or_action, (staticmethod, classmethod)) or (
        callable(func_or_action) and not isinstance(func_or_action, type)
    ):
        return decorator(func_or_action)

    action_type = func_or_action
    return lambda func: decorator(func, action_type)


def get_reducer_marker(method: Any) -> Optional[ReducerMethodMarker]:
    """Return the marker declared directly on ``method`` (or None)."""
    target = _unwrap(method)
    marker = getattr(target, "__dict__", {}).get(REDUCER_MARKER_ATTR)
    if isinstance(marker, ReducerMethodMarker):
        return marker
    return None


def _unwrap(method: Any) -> Any:
    if isinstance(method, (staticmethod, classmethod)):
        return method.__func__
    return method
