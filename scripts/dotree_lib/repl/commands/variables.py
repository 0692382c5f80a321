"""
Variable resolution for dotree commands.

Values come from positional arguments first, in declaration order; the
rest are asked for interactively.
"""

import os
import shlex
from typing import Callable, Optional, Sequence

from dotree_lib.common import warn
from dotree_lib.config.dataclasses import VarDef
from dotree_lib.errors import DotreeError

# (label, default) -> typed value
LineReader = Callable[[str, Optional[str]], str]


def split_remainder(remainder: str) -> list[str]:
    """Split the input left after a key into shell-style arguments."""
    if not remainder.strip():
        return []
    try:
        return shlex.split(remainder, posix=os.name != "nt")
    except ValueError as e:
        raise DotreeError(f"Cannot split arguments {remainder.strip()!r}: {e}") from None


def resolve_variables(
    variables: Sequence[VarDef],
    positional: Sequence[str],
    read_line: LineReader,
) -> dict[str, str]:
    """
    Resolve the value of each declared variable.

    Positional values are used verbatim, an empty argument stays empty.
    Defaults apply only when an interactive answer is empty.

    Args:
        variables: Declared variables, in order
        positional: Values given on the command line
        read_line: Line-reading service, called as read_line(label, default)

    Returns:
        Mapping of variable name to value, in declaration order
    """
    values = list(positional)
    if len(values) > len(variables):
        warn(f"Ignoring extra arguments: {' '.join(values[len(variables):])}")

    resolved = {}
    for var in variables:
        if values:
            resolved[var.name] = values.pop(0)
        else:
            resolved[var.name] = read_line(f"Value for {var.name}", var.default)
    return resolved
