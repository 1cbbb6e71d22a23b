"""Allow ``python -m nmeakit``."""

import sys

from nmeakit.cli import main

sys.exit(main())
