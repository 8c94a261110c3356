"""Allow ``python -m sigsort``."""

import sys

from sigsort.cli_entry import main

if __name__ == "__main__":
    sys.exit(main())
