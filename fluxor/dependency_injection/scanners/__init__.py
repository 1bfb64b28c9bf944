"""Discovery passes for effects and reducers."""

from .effect_discovery import discover_effect_classes
from .reducer_discovery import discover_reducer_methods

__all__ = ["discover_effect_classes", "discover_reducer_methods"]
