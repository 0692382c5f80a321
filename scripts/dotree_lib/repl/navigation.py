"""
Key navigation for dotree.

This module walks the menu graph one key at a time. Keys may be longer
than one character; since no key in a menu is a prefix of another, at
most one key can match the start of the typed input.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dotree_lib.config.dataclasses import ConfigFile, Entry, Menu, SubMenu
from dotree_lib.errors import NoSuchKey

from .context import NavigationState, get_prompt_text
from .menu import MenuView, VisibleEntry, visible_entries

logger = logging.getLogger(__name__)

BACKSPACE_KEYS = ("\x7f", "\b")


class MatchKind(Enum):
    MATCH = "match"
    PENDING = "pending"
    NONE = "none"


@dataclass
class KeyMatch:
    kind: MatchKind
    key: Optional[str] = None
    entry: Optional[Entry] = None
    candidates: list[str] = field(default_factory=list)
    valid_prefix: int = 0  # Length of the longest input prefix some key shares


def match_key(menu: Menu, buffer: str) -> KeyMatch:
    """
    Match typed input against a menu's keys.

    Returns MATCH with the key that is a prefix of `buffer`, PENDING when
    `buffer` is a strict prefix of one or more keys, NONE otherwise.
    """
    candidates = []
    valid_prefix = 0
    for key, entry in menu.entries.items():
        if buffer.startswith(key):
            return KeyMatch(MatchKind.MATCH, key=key, entry=entry)
        if key.startswith(buffer):
            candidates.append(key)
        valid_prefix = max(valid_prefix, _common_prefix(key, buffer))

    if candidates:
        return KeyMatch(MatchKind.PENDING, candidates=candidates)
    return KeyMatch(MatchKind.NONE, valid_prefix=valid_prefix)


def _common_prefix(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


@dataclass(frozen=True)
class Dispatch:
    """A command entry selected by navigation, ready for execution."""
    entry: Entry
    key: str
    menu: str
    path: tuple[str, ...]
    remainder: str = ""  # Input left after the key (positional values)


class Navigator:
    """
    State machine over (current menu, pending keys).

    feed() consumes input and either returns a Dispatch when a command
    entry is reached, returns None when more input is needed, or raises
    NoSuchKey. The caller decides what happens after an invalid key.
    """

    def __init__(self, config: ConfigFile):
        self.config = config
        self.state = NavigationState()

    @property
    def current_menu(self) -> Menu:
        return self.config.menu(self.state.menu)

    @property
    def pending(self) -> str:
        return self.state.pending

    def reset(self) -> None:
        """Go back to the root menu, keeping the consumed-character count."""
        self.state.menu = "root"
        self.state.pending = ""
        self.state.path = []

    def enter(self, menu: str, path: tuple[str, ...] = ()) -> None:
        """Make `menu` current, e.g. to repeat a command from its menu."""
        self.state.menu = menu
        self.state.pending = ""
        self.state.path = list(path)

    def clear_pending(self) -> None:
        self.state.pending = ""

    def backspace(self) -> None:
        self.state.pending = self.state.pending[:-1]

    def visible_entries(self) -> list[VisibleEntry]:
        return visible_entries(self.current_menu, self.config)

    def view(self, message: Optional[str] = None) -> MenuView:
        return MenuView(
            title=self.current_menu.display_title,
            breadcrumb=get_prompt_text(self.state, self.config),
            entries=self.visible_entries(),
            pending=self.state.pending,
            message=message,
        )

    def feed(self, text: str) -> Optional[Dispatch]:
        """
        Consume typed input.

        Raises:
            NoSuchKey: if the pending input matches no key of the current menu
        """
        state = self.state
        state.pending += text
        while state.pending:
            menu = self.current_menu
            result = match_key(menu, state.pending)
            if result.kind is MatchKind.PENDING:
                logger.debug("pending %r, candidates %s", state.pending, result.candidates)
                return None
            if result.kind is MatchKind.NONE:
                raise NoSuchKey(
                    menu=menu.name,
                    keys=state.pending,
                    position=state.consumed + result.valid_prefix + 1,
                )

            key = result.key
            state.pending = state.pending[len(key):]
            state.consumed += len(key)
            if isinstance(result.entry, SubMenu):
                logger.debug("key %r: entering menu '%s'", key, result.entry.menu_name)
                state.menu = result.entry.menu_name
                state.path.append(state.menu)
                continue

            logger.debug("key %r: command in menu '%s'", key, menu.name)
            dispatch = Dispatch(
                entry=result.entry,
                key=key,
                menu=menu.name,
                path=tuple(state.path),
                remainder=state.pending,
            )
            state.pending = ""
            return dispatch
        return None
