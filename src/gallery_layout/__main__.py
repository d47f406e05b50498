"""Allow ``python -m gallery_layout``."""
import sys

from gallery_layout.cli import main

sys.exit(main())
