"""
Constants used internally by the gallery layout engine.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Bias modes accepted by LineCollection
BIAS_MODE_AVG = "avg"
BIAS_MODE_MAX = "max"
BIAS_MODES = (BIAS_MODE_AVG, BIAS_MODE_MAX)

PERCENT = 100.0

# Image files picked up when scanning a directory
SUPPORTED_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".tif", ".tiff"},
)
