"""
Reducer method discovery.
"""

import logging
from typing import Iterable, List, Optional

from ..discovered import DiscoveredReducerMethod, TypeAndMethod
from ..markers import MarkerInspector, default_inspector
from ..options import Options

logger = logging.getLogger("fluxor.discovery")


def discover_reducer_methods(
    options: Options,
    all_candidate_methods: Iterable[TypeAndMethod],
    inspector: Optional[MarkerInspector] = None,
) -> List[DiscoveredReducerMethod]:
    """
    Find reducer methods among the candidates and register their hosts.

    Every marked method is reported. Each concrete host class is
    registered once, in first-seen order; abstract hosts are reported but
    never registered, since only their concrete subclasses can be built.
    """
    inspector = inspector or default_inspector

    discovered = []
    for candidate in all_candidate_methods:
        marker = inspector.reducer_marker(candidate.method)
        if marker is None:
            continue
        discovered.append(DiscoveredReducerMethod(
            host_class_type=candidate.type,
            reducer_marker=marker,
            method=candidate.method,
        ))

    # dict keeps first-occurrence order
    host_class_types = dict.fromkeys(
        d.host_class_type for d in discovered
        if not inspector.is_abstract(d.host_class_type)
    )

    for host_class_type in host_class_types:
        options.register_service(host_class_type)

    logger.debug(
        f"Discovered {len(discovered)} reducer method(s) on "
        f"{len(host_class_types)} host class(es)"
    )
    return discovered
