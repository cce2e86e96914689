"""
Kemeny CLI entry point.

Usage:
    python -m kemeny.cli [FILE]
    python -m kemeny.cli [FILE] --workers 4
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
