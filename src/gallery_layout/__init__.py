"""Public package exports for the justified gallery layout engine."""

from __future__ import annotations

from .collection import LineCollection
from .config import ConfigLoader, GalleryConfig, LayoutConfig, SearchConfig
from .engine import LayoutEngine, adjust_images
from .exceptions import (
    GalleryLayoutError,
    IllegalStateError,
    InvalidArgumentError,
    InvalidConfigurationError,
)
from .image import ImageDescriptor
from .line import Line

__all__ = [
    "ConfigLoader",
    "GalleryConfig",
    "GalleryLayoutError",
    "IllegalStateError",
    "ImageDescriptor",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "LayoutConfig",
    "LayoutEngine",
    "Line",
    "LineCollection",
    "SearchConfig",
    "adjust_images",
]
