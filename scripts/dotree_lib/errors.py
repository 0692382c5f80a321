"""
Error taxonomy for dotree.

Every error raised on purpose derives from DotreeError so the CLI can
report it and pick an exit status.
"""

from typing import Optional


class DotreeError(Exception):
    """Base class for errors reported to the user."""
    pass


class ConfigNotFound(DotreeError):
    """Raised when no configuration file can be located."""
    pass


class ConfigSyntaxError(DotreeError):
    """Raised when configuration text does not match the grammar."""

    def __init__(self, line: int, column: int, expected: list[str],
                 source_line: str = "", path: Optional[str] = None):
        self.line = line
        self.column = column
        self.expected = expected
        self.source_line = source_line
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        where = f"{self.path}:" if self.path else ""
        if len(self.expected) == 1:
            wanted = self.expected[0]
        else:
            wanted = "one of " + ", ".join(self.expected)
        msg = f"{where}{self.line}:{self.column}: syntax error, expected {wanted}"
        if self.source_line:
            msg += f"\n  {self.source_line}\n  {' ' * (self.column - 1)}^"
        return msg

    def with_path(self, path: str) -> "ConfigSyntaxError":
        return ConfigSyntaxError(self.line, self.column, self.expected,
                                 self.source_line, path)


class ModelError(DotreeError):
    """Raised when a configuration parses but is semantically invalid."""
    pass


class NoSuchKey(DotreeError):
    """Raised when typed input matches no entry of the current menu."""

    def __init__(self, menu: str, keys: str, position: int, reason: str = "no entry matches"):
        self.menu = menu
        self.keys = keys
        self.position = position
        super().__init__(
            f"{reason}: {keys!r} in menu '{menu}' (input position {position})"
        )


class CommandFailure(DotreeError):
    """Raised when a spawned command exits with a non-zero status."""

    def __init__(self, status: int, command: str):
        self.status = status
        self.command = command
        super().__init__(f"command exited with status {status}: {command}")
