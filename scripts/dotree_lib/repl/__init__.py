"""
dotree_lib.repl - Interactive components of dotree

This package contains:
- context: navigation state and breadcrumb text
- menu: visible-entry projection of the current menu
- navigation: key matching and the Navigator state machine
- display: prompt_toolkit formatted text for a menu
- terminal: prompt_toolkit key/line reading and command echo
- session: the main loop
- commands/: the execution stage
"""

from .context import NavigationState, get_prompt_text
from .menu import MenuView, VisibleEntry, visible_entries
from .navigation import Dispatch, KeyMatch, MatchKind, Navigator, match_key
from .session import InvalidKeyPolicy, Session, SessionOptions

__all__ = [
    'NavigationState',
    'get_prompt_text',
    'MenuView',
    'VisibleEntry',
    'visible_entries',
    'Dispatch',
    'KeyMatch',
    'MatchKind',
    'Navigator',
    'match_key',
    'InvalidKeyPolicy',
    'Session',
    'SessionOptions',
]
