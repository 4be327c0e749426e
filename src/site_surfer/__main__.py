"""Allow ``python -m site_surfer``."""

import sys

from site_surfer.cli import main

if __name__ == "__main__":
    sys.exit(main())
