"""Allow ``python -m webpilot``."""

import sys

from webpilot.cli import main

sys.exit(main())
