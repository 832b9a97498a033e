"""Allow running flowtable as ``python -m flowtable``."""

import sys

from flowtable.cli import main

sys.exit(main())
