"""Allow running as ``python -m spectrace``."""

import sys

from spectrace.cli import main

sys.exit(main())
