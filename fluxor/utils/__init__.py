"""Fluxor utilities."""

from .scanner import PackageScanner

__all__ = ["PackageScanner"]
