"""Allow running mdview as ``python -m mdview``."""

import sys

from mdview.cli import main

sys.exit(main())
