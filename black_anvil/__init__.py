"""
black_anvil - Build and install Cargo binaries.

Usage:
    python -m black_anvil <command> [options]

Commands:
    install     Build, stage the binary, optionally vendor dependencies
    inspect     Show manifest, artifact location and install state
"""

from .cli import __version__, main

__all__ = ["__version__", "main"]
