"""
Command-line interface entry point for Outpainter.

This allows the CLI to be run as:
    python -m outpainter.cli
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
