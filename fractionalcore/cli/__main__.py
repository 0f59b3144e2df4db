"""
Fractional Core CLI entry point.

Usage:
    python -m fractionalcore.cli encode "FC"
    python -m fractionalcore.cli decode grid.txt
    python -m fractionalcore.cli evaluate "√16/4"
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
