"""
Exception types raised by the gallery layout engine.

All of them signal configuration or programming errors. They are raised
immediately and never retried, so a layout is either returned complete
or not at all.
"""

from __future__ import annotations


class GalleryLayoutError(Exception):
    """Base class for all layout errors."""


class InvalidConfigurationError(GalleryLayoutError, ValueError):
    """Raised when layout configuration values are invalid."""


class InvalidArgumentError(GalleryLayoutError, ValueError):
    """Raised for negative scales or dimensions and unknown bias modes."""


class IllegalStateError(GalleryLayoutError, RuntimeError):
    """Raised when an operation is not valid for the current state."""


__all__ = [
    "GalleryLayoutError",
    "IllegalStateError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
]
