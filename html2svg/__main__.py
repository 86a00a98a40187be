"""Entry point for ``python -m html2svg``."""

import sys

from html2svg.cli import main

if __name__ == "__main__":
    sys.exit(main())
