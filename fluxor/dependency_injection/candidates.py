"""
Candidate enumeration - materialise the classes and methods under the
configured scan targets.
"""

import inspect
import logging
from typing import Any, Iterable, List, Optional, Tuple

from ..utils.scanner import PackageScanner
from .discovered import TypeAndMethod
from .scan_settings import ScanTarget

logger = logging.getLogger("fluxor.discovery")


class CandidateEnumerator:
    """
    Lists every class, and every method declared on those classes, that is
    visible under a set of scan targets.

    Targets are enumerated in order and independently, so a target listed
    twice contributes its candidates twice. A target with a namespace is
    scanned from that namespace downwards.
    """

    def __init__(
        self,
        scanner: Optional[PackageScanner] = None,
        *,
        recursive: bool = True,
        max_depth: int = 5,
    ):
        self.scanner = scanner or PackageScanner()
        self.recursive = recursive
        self.max_depth = max_depth

    def types(self, targets: Iterable[ScanTarget]) -> List[type]:
        """Classes visible under ``targets``."""
        candidates: List[type] = []
        for target in targets:
            candidates.extend(self._types_for(target))
        return candidates

    def methods(self, targets: Iterable[ScanTarget]) -> List[TypeAndMethod]:
        """(class, method) pairs for every method declared on each class."""
        return methods_of(self.types(targets))

    def candidates(self, targets: Iterable[ScanTarget]) -> Tuple[List[type], List[TypeAndMethod]]:
        """Both candidate lists from a single scan."""
        types = self.types(targets)
        return types, methods_of(types)

    def _types_for(self, target: ScanTarget) -> List[type]:
        root = target.namespace or target.module
        recursive = self.recursive or bool(target.namespace)
        found = self.scanner.scan_package(root, recursive=recursive, max_depth=self.max_depth)
        if not found:
            logger.warning(f"No classes found under {target}")
        return [cls for cls in found if target.matches(cls.__module__)]


def methods_of(types: Iterable[type]) -> List[TypeAndMethod]:
    return [
        TypeAndMethod(type=cls, method=method)
        for cls in types
        for method in declared_methods(cls)
    ]


def declared_methods(cls: type) -> List[Any]:
    """
    Functions declared in the body of ``cls`` (not inherited).

    Static and class methods are unwrapped to the underlying function.
    """
    methods = []
    for attr in vars(cls).values():
        if isinstance(attr, (staticmethod, classmethod)):
            attr = attr.__func__
        if inspect.isfunction(attr):
            methods.append(attr)
    return methods
