"""Run the bridge with ``python -m blelight``."""

import sys

from .cli import main

sys.exit(main())
