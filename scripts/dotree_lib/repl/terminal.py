"""
prompt_toolkit terminal for dotree.

Reads single keys while showing the current menu, reads whole lines for
variable values, and echoes commands before they run.
"""

import sys
from pathlib import Path
from typing import Optional

from prompt_toolkit import Application, PromptSession
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import FormattedTextControl
from rich.console import Console
from rich.syntax import Syntax

from dotree_lib.common.prompts import make_prompt_session, prompt_value
from dotree_lib.config.constants import HISTORY_FILE

from .display import DT_STYLE, menu_fragments
from .menu import MenuView
from .navigation import BACKSPACE_KEYS


class Terminal:
    """Interactive terminal used by a Session."""

    def __init__(self, history_file: Optional[Path] = HISTORY_FILE):
        self.history_file = history_file
        self.console = Console(stderr=True)
        self._session: Optional[PromptSession] = None

    def is_interactive(self) -> bool:
        return sys.stdin.isatty()

    def read_key(self, view: MenuView) -> str:
        """Show the menu and return one typed character (menu is erased after)."""
        kb = KeyBindings()

        @kb.add("c-c")
        def _interrupt(event):
            event.app.exit(exception=KeyboardInterrupt())

        @kb.add("c-d")
        def _eof(event):
            event.app.exit(exception=EOFError())

        @kb.add("backspace")
        def _backspace(event):
            event.app.exit(result=BACKSPACE_KEYS[0])

        @kb.add("<any>")
        def _key(event):
            # Arrows, function keys, Enter, Tab: ignored
            if len(event.data) == 1 and event.data.isprintable():
                event.app.exit(result=event.data)

        window = Window(FormattedTextControl(menu_fragments(view)), always_hide_cursor=True)
        app = Application(
            layout=Layout(window),
            key_bindings=kb,
            style=DT_STYLE,
            erase_when_done=True,
            full_screen=False,
        )
        return app.run()

    def read_line(self, label: str, default: Optional[str] = None) -> str:
        if self._session is None:
            self._session = make_prompt_session(self.history_file)
        return prompt_value(label, default, session=self._session)

    def echo_command(self, command: str) -> None:
        self.console.print(
            Syntax(command, "bash", theme="ansi_dark", background_color="default", word_wrap=True)
        )
