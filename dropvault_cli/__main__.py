"""
Module execution entry point.

Allows running with: python -m dropvault_cli
"""

import sys
from dropvault_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
