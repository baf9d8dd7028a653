"""Entry point for tasklist when run as a module.

This allows the package to be run with: python -m tasklist
"""

import sys

from tasklist.cli import main

if __name__ == "__main__":
    sys.exit(main())
