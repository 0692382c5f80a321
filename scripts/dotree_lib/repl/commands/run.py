"""
Execution stage for dotree.

Turns a selected entry into exactly one process invocation: resolve the
variables, expand snippets, pick the shell, echo, spawn, check the status.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from dotree_lib.config.dataclasses import Command, ConfigFile, Entry
from dotree_lib.config.validation import resolve_expr
from dotree_lib.errors import CommandFailure

from .shell import resolve_shell, spawn_process
from .variables import LineReader, resolve_variables

logger = logging.getLogger(__name__)

Spawner = Callable[[Sequence[str], Optional[Path], Mapping[str, str]], int]


@dataclass
class Invocation:
    argv: list[str]
    cwd: Optional[Path]
    env: dict[str, str]
    command: str
    echo: bool


def should_echo(entry: Entry, config: ConfigFile) -> bool:
    """The file's echo setting, flipped by the command's `@` marker."""
    return config.settings.echo_by_default != entry.toggle_echo


def prepare_invocation(
    entry: Entry,
    config: ConfigFile,
    values: Mapping[str, str],
    workdir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Invocation:
    """Build the process invocation for a command entry."""
    base_env = os.environ if environ is None else environ
    command = resolve_expr(entry.expr, config.snippets)
    command_shell = entry.shell if isinstance(entry, Command) else None
    shell = resolve_shell(command_shell, config.settings.shell, base_env)

    env = dict(base_env)
    env.update(values)
    return Invocation(
        argv=shell.argv(command),
        cwd=workdir,
        env=env,
        command=command,
        echo=should_echo(entry, config),
    )


def run_entry(
    entry: Entry,
    config: ConfigFile,
    positional: Sequence[str],
    read_line: LineReader,
    echo: Callable[[str], None],
    spawn: Spawner = spawn_process,
    workdir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Run a command entry.

    Returns:
        The exit status (non-zero only when the entry ignores results)

    Raises:
        CommandFailure: on a non-zero status without `ignore_result`
    """
    variables = entry.variables if isinstance(entry, Command) else ()
    values = resolve_variables(variables, positional, read_line)
    invocation = prepare_invocation(entry, config, values, workdir, environ)

    if invocation.echo:
        echo(invocation.command)
    status = spawn(invocation.argv, invocation.cwd, invocation.env)
    logger.debug("command exited with %d", status)

    ignore = isinstance(entry, Command) and entry.ignore_result
    if status != 0 and not ignore:
        raise CommandFailure(status, invocation.command)
    return status
