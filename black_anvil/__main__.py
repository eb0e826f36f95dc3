"""
Entry point for running anvil as a module: python -m black_anvil
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
