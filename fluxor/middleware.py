"""
Middleware base class.

Middleware types are registered through ``Options.add_middleware()``, which
also widens the scan scope to the middleware's own package. Every hook is
a no-op by default; subclasses override the ones they need.
"""

from typing import Any


class Middleware:
    """Pluggable store component that observes dispatching."""

    async def initialize(self, dispatcher: Any, store: Any) -> None:
        """Called once when the store is initialized."""

    def after_initialize_all_middlewares(self) -> None:
        """Called after every middleware has been initialized."""

    def may_dispatch(self, action: Any) -> bool:
        """Return False to veto ``action``."""
        return True

    def before_dispatch(self, action: Any) -> None:
        """Called before ``action`` reaches the reducers."""

    def after_dispatch(self, action: Any) -> None:
        """Called after ``action`` has been reduced and effects triggered."""
