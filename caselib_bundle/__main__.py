"""
Entry point for running caselib_bundle as a module.

Usage:
    python -m caselib_bundle export project.json --output-dir out
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
