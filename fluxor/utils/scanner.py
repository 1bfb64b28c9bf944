"""
Package Scanner Utility.

Provides runtime introspection to discover classes within modules and
packages. Used by the candidate enumerator to materialise the classes
visible under each scan target.
"""

import importlib
import pkgutil
import inspect
import logging
import time
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Type

logger = logging.getLogger("fluxor.scanner")

# Submodule name fragments never imported during recursive scans
DEFAULT_EXCLUDES = ("__pycache__", "migrations")


class PackageScanner:
    """
    Scanner for discovering classes in Python packages.

    Features:
    - Safe importing with error handling
    - Recursive package scanning with depth control
    - Caching with TTL
    - Class filtering by predicate
    - Scan statistics
    """

    def __init__(self, cache_ttl: int = 300, exclude: Sequence[str] = DEFAULT_EXCLUDES):
        self._class_cache: Dict[str, List[Type]] = {}
        self._cache_timestamps: Dict[str, float] = {}
        self._cache_ttl = cache_ttl
        self._exclude = tuple(exclude)
        self._scan_stats = {
            'cache_hits': 0,
            'cache_misses': 0,
            'scan_time': 0.0,
            'modules_scanned': 0,
            'classes_found': 0,
            'errors_encountered': 0,
        }

    def clear_cache(self) -> None:
        """Clear all caches."""
        self._class_cache.clear()
        self._cache_timestamps.clear()
        self._scan_stats = dict.fromkeys(self._scan_stats, 0)

    def get_stats(self) -> Dict[str, Any]:
        """Get scanning performance statistics."""
        return self._scan_stats.copy()

    def _is_cache_valid(self, cache_key: str) -> bool:
        if cache_key not in self._cache_timestamps:
            return False
        return (time.time() - self._cache_timestamps[cache_key]) < self._cache_ttl

    def scan_package(
        self,
        package: "str | ModuleType",
        predicate: Optional[Callable[[Type], bool]] = None,
        recursive: bool = False,
        max_depth: int = 3,
        use_cache: bool = True,
    ) -> List[Type]:
        """
        Scan a package for classes defined in it.

        Args:
            package: Module object or dotted path (e.g. 'myapp.store.counter')
            predicate: Optional custom filter function
            recursive: Whether to scan subpackages
            max_depth: Maximum recursion depth for subpackages
            use_cache: Whether to use caching

        Returns:
            Discovered classes, in module then definition order. A package
            that cannot be imported yields an empty list.
        """
        start_time = time.time()
        package_name = package.__name__ if isinstance(package, ModuleType) else package

        # Use predicate qualname for stable identity; id() can be reused
        predicate_key = getattr(predicate, '__qualname__', repr(predicate)) if predicate else "None"
        cache_key = f"{package_name}:{predicate_key}:{recursive}:{max_depth}"

        if use_cache and cache_key in self._class_cache and self._is_cache_valid(cache_key):
            self._scan_stats['cache_hits'] += 1
            return self._class_cache[cache_key][:]

        self._scan_stats['cache_misses'] += 1
        discovered: List[Type] = []

        try:
            module = package if isinstance(package, ModuleType) else importlib.import_module(package_name)
        except ImportError as e:
            self._scan_stats['errors_encountered'] += 1
            logger.warning(f"Could not import package {package_name}: {e}")
            return discovered

        self._scan_module(module, discovered, predicate)
        self._scan_stats['modules_scanned'] += 1

        if recursive and hasattr(module, "__path__") and max_depth > 0:
            seen_modules: Set[str] = {module.__name__}

            for _, name, _ in pkgutil.walk_packages(
                module.__path__,
                module.__name__ + ".",
                onerror=lambda x: None,
            ):
                current_depth = name.count('.') - package_name.count('.')
                if current_depth > max_depth:
                    continue

                if name in seen_modules:
                    continue
                seen_modules.add(name)

                if any(skip in name for skip in self._exclude):
                    continue

                try:
                    submodule = importlib.import_module(name)
                except Exception as e:
                    self._scan_stats['errors_encountered'] += 1
                    logger.warning(f"Failed to import submodule {name}: {e}")
                    continue

                self._scan_module(submodule, discovered, predicate)
                self._scan_stats['modules_scanned'] += 1

        if use_cache:
            self._class_cache[cache_key] = discovered[:]
            self._cache_timestamps[cache_key] = time.time()

        self._scan_stats['classes_found'] += len(discovered)
        self._scan_stats['scan_time'] += time.time() - start_time

        return discovered

    def _scan_module(
        self,
        module: ModuleType,
        discovered: List[Type],
        predicate: Optional[Callable[[Type], bool]],
    ) -> None:
        """Collect classes defined in ``module`` (imports are ignored)."""
        for obj in _classes_in_definition_order(module):
            if predicate and not predicate(obj):
                continue
            if obj not in discovered:
                discovered.append(obj)


def _classes_in_definition_order(module: ModuleType) -> List[Type]:
    """
    Classes defined in ``module``, nested classes included.

    Module ``__dict__`` preserves insertion order, so top-level classes come
    out in the order they were defined.
    """
    found: List[Type] = []

    def visit(owner: Any) -> None:
        for obj in list(vars(owner).values()):
            if not inspect.isclass(obj) or obj.__module__ != module.__name__:
                continue
            if obj in found:
                continue
            # Skip aliases of classes defined elsewhere in the module
            if owner is not module and not obj.__qualname__.startswith(owner.__qualname__ + "."):
                continue
            found.append(obj)
            visit(obj)

    visit(module)
    return found
