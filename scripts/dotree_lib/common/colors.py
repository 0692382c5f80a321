"""
ANSI color codes and message helpers for dotree.

Messages go to stderr so they never mix with the output of the commands
dotree launches.
"""

import sys


class Colors:
    """ANSI color escape codes for terminal output."""
    RED = "\033[0;31m"
    YELLOW = "\033[1;33m"
    NC = "\033[0m"  # No Color / Reset


def _emit(prefix: str, color: str, msg: str) -> None:
    if sys.stderr.isatty():
        print(f"{color}{prefix}{Colors.NC} {msg}", file=sys.stderr)
    else:
        print(f"{prefix} {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    """Report a warning in yellow."""
    _emit("[!]", Colors.YELLOW, msg)


def error(msg: str) -> None:
    """Report an error in red."""
    _emit("[ERROR]", Colors.RED, msg)
