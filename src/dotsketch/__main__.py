"""Allow ``python -m dotsketch``."""

import sys

from dotsketch.main import main

sys.exit(main())
