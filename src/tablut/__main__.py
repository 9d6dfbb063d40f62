"""Allow ``python -m tablut``."""

import sys

from tablut.app import main

sys.exit(main())
