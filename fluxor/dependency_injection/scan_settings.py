"""
Scan targets - which modules (and which namespaces inside them) to scan.
"""

from dataclasses import dataclass
from types import ModuleType
from typing import Optional, Union


ModuleRef = Union[ModuleType, str]


@dataclass(frozen=True)
class ScanTarget:
    """
    A module to scan, optionally narrowed to a namespace.

    ``module`` is a module object or its dotted name. ``namespace`` is a
    dotted prefix; when given, only classes defined in that module path or
    beneath it are candidates.
    """
    module: ModuleRef
    namespace: Optional[str] = None

    @property
    def module_name(self) -> str:
        if isinstance(self.module, ModuleType):
            return self.module.__name__
        return self.module

    def matches(self, defining_module: str) -> bool:
        """True if a class defined in ``defining_module`` is in scope."""
        if not self.namespace:
            return True
        return defining_module == self.namespace or defining_module.startswith(self.namespace + ".")

    def __repr__(self) -> str:
        if self.namespace:
            return f"ScanTarget({self.module_name!r}, namespace={self.namespace!r})"
        return f"ScanTarget({self.module_name!r})"
