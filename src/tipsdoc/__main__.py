"""Module entry point for running with python -m tipsdoc."""

import sys

from tipsdoc.cli import main

if __name__ == "__main__":
    sys.exit(main())
