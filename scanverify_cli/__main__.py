"""
Module execution entry point.

Allows running with: python -m scanverify_cli
"""

import sys
from scanverify_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
