"""Allow ``python -m expansion_browser``."""

import sys

from expansion_browser import app

sys.exit(app.main())
