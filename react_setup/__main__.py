"""Allow ``python -m react_setup``."""

import sys

from react_setup.pipeline import main

sys.exit(main())
