"""
Main dotree loop.

A Session replays keys given on the command line, falls back to reading
keys interactively, hands selected commands to the execution stage and
returns to the command's menu when the command is marked `repeat`.

The terminal is any object with read_key(view), read_line(label, default),
echo_command(command) and is_interactive(); see repl.terminal.Terminal.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotree_lib.config.constants import ENV_ON_INVALID_KEY
from dotree_lib.config.dataclasses import Command, ConfigFile
from dotree_lib.errors import DotreeError, NoSuchKey

from .commands.run import Spawner, run_entry
from .commands.shell import spawn_process
from .commands.variables import split_remainder
from .navigation import BACKSPACE_KEYS, Dispatch, Navigator

logger = logging.getLogger(__name__)


class InvalidKeyPolicy(Enum):
    """What an interactive session does after a key that matches nothing."""
    STAY = "stay"    # Clear the typed keys, stay in the current menu
    RESET = "reset"  # Go back to the root menu
    EXIT = "exit"    # End the session with the error

    @classmethod
    def resolve(cls, arg: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> "InvalidKeyPolicy":
        """Get the policy from the argument, DT_ON_INVALID_KEY, or default."""
        env = os.environ if environ is None else environ
        value = arg or env.get(ENV_ON_INVALID_KEY)
        if not value:
            return cls.STAY
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise DotreeError(f"Invalid key policy '{value}' (choose from {choices})") from None


@dataclass
class SessionOptions:
    workdir: Optional[Path] = None  # None = the invoking working directory
    policy: InvalidKeyPolicy = InvalidKeyPolicy.STAY
    environ: Optional[Mapping[str, str]] = None
    extra_args: list[str] = field(default_factory=list)


class Session:
    def __init__(self, config: ConfigFile, terminal, spawn: Spawner = spawn_process,
                 options: Optional[SessionOptions] = None):
        self.config = config
        self.terminal = terminal
        self.spawn = spawn
        self.options = options or SessionOptions()
        self.navigator = Navigator(config)
        self._message: Optional[str] = None

    def run(self, keys: Optional[str] = None) -> int:
        """
        Run until a command finishes without `repeat`.

        Args:
            keys: Characters to replay as if typed (the CLI argument)

        Returns:
            0 once the last command ran (ignored failures included)

        Raises:
            NoSuchKey: invalid CLI keys, or any invalid key under EXIT policy
            CommandFailure: a command failed without `ignore_result`
        """
        interactive = self.terminal.is_interactive()
        dispatch = None
        if keys:
            dispatch = self.navigator.feed(keys)
            if dispatch is None and not interactive:
                raise NoSuchKey(
                    menu=self.navigator.current_menu.name,
                    keys=keys,
                    position=len(keys),
                    reason="incomplete key sequence",
                )
        elif not interactive:
            raise DotreeError("No keys given and no interactive terminal available")

        positional = list(self.options.extra_args)
        while True:
            if dispatch is None:
                dispatch = self._read_dispatch()
            self._execute(dispatch, positional)

            entry = dispatch.entry
            if not (isinstance(entry, Command) and entry.repeat and interactive):
                return 0
            logger.debug("repeat: back to menu '%s'", dispatch.menu)
            self.navigator.enter(dispatch.menu, dispatch.path)
            dispatch = None
            positional = []

    def _execute(self, dispatch: Dispatch, extra: Sequence[str]) -> int:
        positional = split_remainder(dispatch.remainder) + list(extra)
        return run_entry(
            dispatch.entry,
            self.config,
            positional,
            read_line=self.terminal.read_line,
            echo=self.terminal.echo_command,
            spawn=self.spawn,
            workdir=self.options.workdir,
            environ=self.options.environ,
        )

    def _read_dispatch(self) -> Dispatch:
        """Read keys until a command entry is selected."""
        while True:
            key = self.terminal.read_key(self.navigator.view(self._message))
            self._message = None
            if key in BACKSPACE_KEYS:
                self.navigator.backspace()
                continue
            try:
                dispatch = self.navigator.feed(key)
            except NoSuchKey as e:
                if self.options.policy is InvalidKeyPolicy.EXIT:
                    raise
                logger.debug("invalid key: %s", e)
                self._message = f"No entry for '{e.keys}'"
                if self.options.policy is InvalidKeyPolicy.RESET:
                    self.navigator.reset()
                else:
                    self.navigator.clear_pending()
                continue
            if dispatch is not None:
                return dispatch
