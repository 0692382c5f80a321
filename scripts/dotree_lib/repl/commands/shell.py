"""
Shell selection and process spawning for dotree.

A command runs as `<shell> <args...> <command string>`. The shell comes
from the command, the file, DT_DEFAULT_SHELL or the platform default, in
that order.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotree_lib.config.constants import ENV_DEFAULT_SHELL
from dotree_lib.config.dataclasses import ShellDef
from dotree_lib.config.parser import parse_shell_words
from dotree_lib.errors import ConfigSyntaxError, DotreeError

logger = logging.getLogger(__name__)


def resolve_shell(
    command_shell: Optional[ShellDef] = None,
    file_shell: Optional[ShellDef] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ShellDef:
    """Get the shell from the command, the file, the environment, or default."""
    if command_shell:
        return command_shell
    if file_shell:
        return file_shell
    env = os.environ if environ is None else environ
    if env.get(ENV_DEFAULT_SHELL):
        try:
            return ShellDef.from_words(parse_shell_words(env[ENV_DEFAULT_SHELL]))
        except ConfigSyntaxError as e:
            raise e.with_path(ENV_DEFAULT_SHELL) from None
    return ShellDef.platform_default()


def spawn_process(argv: Sequence[str], cwd: Optional[Path], env: Mapping[str, str]) -> int:
    """
    Run a command and wait for it.

    Returns:
        The exit status of the process
    """
    logger.debug("spawning %s (cwd=%s)", list(argv), cwd)
    try:
        result = subprocess.run(list(argv), cwd=cwd, env=dict(env), check=False)
    except FileNotFoundError:
        raise DotreeError(f"Shell not found: {argv[0]}") from None
    return result.returncode
