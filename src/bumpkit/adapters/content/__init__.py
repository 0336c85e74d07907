"""File content sources for the reconciliation engine."""

from __future__ import annotations

from .filesystem import LocalCheckoutContentSource, UnsafePathError, resolve_within
from .http import ContentFetchError, HttpContentSource
from .memory import InMemoryContentSource

__all__ = [
    "ContentFetchError",
    "HttpContentSource",
    "InMemoryContentSource",
    "LocalCheckoutContentSource",
    "UnsafePathError",
    "resolve_within",
]
