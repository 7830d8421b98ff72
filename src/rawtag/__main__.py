"""Allow ``python -m rawtag``."""

import sys

from rawtag.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
