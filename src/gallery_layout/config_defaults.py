"""Shared default values for user-facing configuration settings."""
from gallery_layout.type_defs import BiasMode

# Layout
DEFAULT_DESIRED_HEIGHT = 300
DEFAULT_OPTIMIZED_WIDTH = 1200
DEFAULT_MARGIN = 10
DEFAULT_BIAS_MODE: BiasMode = "avg"
DEFAULT_QUICK_MODE = False

# Search
# The best mode search grows exponentially with the number of lines the
# greedy pass produces. Galleries needing more lines fall back to quick mode.
DEFAULT_MAX_BEST_MODE_LINES = 20
