"""Entry point for running mancheck as a module.

Usage:
    python -m mancheck
    python -m mancheck --verbose
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
