"""
Marker inspection - how discovery decides what is an effect or a reducer.

Discovery never looks at classes or functions directly; it asks a
``MarkerInspector``. Callers can substitute their own inspector to drive
the discoverers with synthetic descriptors.
"""

import inspect
from typing import Any, Optional, Protocol, runtime_checkable

from ..effects import Effect, EffectWrapper, is_infrastructure
from ..reducers import ReducerMethodMarker, get_reducer_marker


@runtime_checkable
class MarkerInspector(Protocol):
    """Answers marker questions about candidate types and methods."""

    def is_effect(self, candidate_type: Any) -> bool:
        """True if the type implements the effect capability."""
        ...

    def is_effect_wrapper(self, candidate_type: Any) -> bool:
        """True if the type is the generic effect adapter (infrastructure)."""
        ...

    def reducer_marker(self, method: Any) -> Optional[ReducerMethodMarker]:
        """Reducer marker declared on ``method``, or None."""
        ...

    def is_abstract(self, candidate_type: Any) -> bool:
        """True if the type cannot be instantiated directly."""
        ...


class DefaultMarkerInspector:
    """Inspector for real Python classes and functions."""

    def is_effect(self, candidate_type: Any) -> bool:
        return inspect.isclass(candidate_type) and issubclass(candidate_type, Effect)

    def is_effect_wrapper(self, candidate_type: Any) -> bool:
        return candidate_type is EffectWrapper or is_infrastructure(candidate_type)

    def reducer_marker(self, method: Any) -> Optional[ReducerMethodMarker]:
        return get_reducer_marker(method)

    def is_abstract(self, candidate_type: Any) -> bool:
        return inspect.isabstract(candidate_type)


default_inspector = DefaultMarkerInspector()
