"""
Shared utilities for the anvil CLI.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

# =============================================================================
# Constants
# =============================================================================

DEFAULT_BUILD_TOOL = "cargo"
DEFAULT_INSTALL_DIR = Path("./install")


# =============================================================================
# Logging
# =============================================================================


class Logger:
    """Stage-oriented console logger.

    Stage banners go to stdout, problems to stderr. ANSI color is used only
    when stdout is a terminal, unless overridden with ``set_color``.
    """

    # level -> (tag, ANSI code)
    TAGS = {
        "success": ("[OK]", "\033[92m"),
        "warning": ("[WARN]", "\033[93m"),
        "error": ("[ERROR]", "\033[91m"),
    }
    STAGE = "\033[1;96m"
    RESET = "\033[0m"

    def __init__(self, use_color: Optional[bool] = None):
        self._use_color = sys.stdout.isatty() if use_color is None else use_color

    def set_color(self, use_color: bool) -> None:
        self._use_color = use_color

    def _paint(self, text: str, code: str) -> str:
        return f"{code}{text}{self.RESET}" if self._use_color else text

    def _tagged(self, level: str, message: str, stream: TextIO) -> None:
        tag, code = self.TAGS[level]
        print(f"  {self._paint(tag, code)} {message}", file=stream)

    def header(self, message: str) -> None:
        """Banner for a pipeline stage or report section."""
        print(f"\n{self._paint('==> ' + message, self.STAGE)}")

    def info(self, message: str) -> None:
        print(f"  {message}")

    def success(self, message: str) -> None:
        self._tagged("success", message, sys.stdout)

    def warning(self, message: str) -> None:
        self._tagged("warning", message, sys.stderr)

    def error(self, message: str) -> None:
        self._tagged("error", message, sys.stderr)

    def field(self, label: str, value: object) -> None:
        """``label: value`` line, labels padded so values line up."""
        print(f"  {label + ':':<23} {value}")


# Global logger instance
log = Logger()


def format_cmd(cmd: list[str]) -> str:
    return " ".join(cmd)
