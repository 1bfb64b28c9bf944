"""
Effect class discovery.
"""

import logging
from typing import Any, Iterable, List, Optional

from ..discovered import DiscoveredEffectClass
from ..markers import MarkerInspector, default_inspector
from ..options import Options

logger = logging.getLogger("fluxor.discovery")


def discover_effect_classes(
    options: Options,
    all_candidate_types: Iterable[Any],
    inspector: Optional[MarkerInspector] = None,
) -> List[DiscoveredEffectClass]:
    """
    Find effect classes among the candidates and register each one.

    Duplicates in the input are kept, each producing its own unit and its
    own registration call. Order follows the input.
    """
    inspector = inspector or default_inspector

    discovered = [
        DiscoveredEffectClass(implementing_type=t)
        for t in all_candidate_types
        if inspector.is_effect(t) and not inspector.is_effect_wrapper(t)
    ]

    for effect in discovered:
        options.register_service(effect.implementing_type)

    logger.debug(f"Discovered {len(discovered)} effect class(es)")
    return discovered
