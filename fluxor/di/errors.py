"""
DI-specific error types with rich diagnostics.
"""

from typing import List, Optional


class DIError(Exception):
    """Base exception for DI errors."""
    pass


class ProviderNotFoundError(DIError):
    """Provider not found for requested token."""

    def __init__(
        self,
        token: str,
        tag: Optional[str] = None,
        candidates: Optional[List[str]] = None,
    ):
        self.token = token
        self.tag = tag
        self.candidates = candidates or []

        msg = f"No provider found for token={token}"
        if tag:
            msg += f" (tag={tag})"

        if candidates:
            msg += "\n\nCandidates found:"
            for candidate in candidates:
                msg += f"\n  - {candidate}"

        msg += "\n\nSuggested fixes:"
        msg += f"\n  - Register a service for {token}"
        msg += "\n  - Check that the module defining it is included in scan_assemblies()"

        super().__init__(msg)


class ProviderConflictError(DIError, ValueError):
    """A different provider is already registered under the same token."""

    def __init__(
        self,
        token: str,
        existing: str,
        existing_scope: str,
        incoming: str,
        incoming_scope: str,
        tag: Optional[str] = None,
    ):
        self.token = token
        self.tag = tag
        self.existing = existing
        self.incoming = incoming

        msg = (
            f"Provider for {token} (tag={tag}) already registered: "
            f"{existing} [{existing_scope}], cannot register {incoming} [{incoming_scope}]"
            f"\n\nSuggested fixes:"
            f"\n  - Register the service once, with a single lifetime"
            f"\n  - Switch the registration strategy before discovery runs"
        )

        super().__init__(msg)


class ScopeViolationError(DIError):
    """Request-scoped provider resolved into a singleton."""

    def __init__(
        self,
        provider_token: str,
        provider_scope: str,
        consumer_token: str,
        consumer_scope: str,
    ):
        self.provider_token = provider_token
        self.provider_scope = provider_scope
        self.consumer_token = consumer_token
        self.consumer_scope = consumer_scope

        msg = (
            f"Scope violation: {provider_scope}-scoped provider '{provider_token}' "
            f"injected into {consumer_scope}-scoped '{consumer_token}'. "
            f"\n\nScope rules forbid shorter-lived scopes from being injected into longer-lived scopes."
            f"\n\nSuggested fixes:"
            f"\n  - Change '{consumer_token}' to {provider_scope} scope"
            f"\n  - Change '{provider_token}' to {consumer_scope} scope"
        )

        super().__init__(msg)
