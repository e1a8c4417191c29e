"""Allow ``python -m road_registry``."""

import sys

from .cli import main

sys.exit(main())
