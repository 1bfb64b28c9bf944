"""
Discovered units handed back to the hosting application.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Type

from ..reducers import ReducerMethodMarker


@dataclass(frozen=True)
class TypeAndMethod:
    """A candidate method together with the class that declares it."""
    type: Type
    method: Callable[..., Any]


@dataclass(frozen=True)
class DiscoveredEffectClass:
    """A class implementing the effect capability."""
    implementing_type: Type


@dataclass(frozen=True)
class DiscoveredReducerMethod:
    """A reducer method and the class hosting it."""
    host_class_type: Type
    reducer_marker: ReducerMethodMarker
    method: Callable[..., Any]

    @property
    def action_type(self) -> Optional[Type]:
        return self.reducer_marker.action_type

    @property
    def method_name(self) -> str:
        return getattr(self.method, "__name__", repr(self.method))
