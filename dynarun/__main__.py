"""Allow running dynarun as ``python -m dynarun``."""

import sys

from .cli import main

sys.exit(main())
