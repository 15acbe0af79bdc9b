"""Allow running the CLI with ``python -m swagcli``."""

import sys

from swagcli.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
