"""Errors raised by the windowing engine."""

from __future__ import annotations


class VirtualizationError(Exception):
    """Base class for windowing engine errors."""


class InvalidConfigurationError(VirtualizationError, ValueError):
    """Geometry or count inputs that cannot describe a list."""


class InconsistentCollectionError(VirtualizationError, LookupError):
    """The declared item count has drifted from the collection's length."""
