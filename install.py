#!/usr/bin/env python3
"""black-anvil Install Pipeline - Entry Point."""
import sys

# Add the repository root to path for the black_anvil package
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent))

from black_anvil.cli import main

if __name__ == "__main__":
    sys.exit(main(["install", *sys.argv[1:]]))
