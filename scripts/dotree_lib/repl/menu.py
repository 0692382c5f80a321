"""
Menu projections for dotree renderers.

The navigation engine exposes the current menu as a list of VisibleEntry
values; renderers never look at the model directly.
"""

from dataclasses import dataclass, field
from typing import Optional

from dotree_lib.config.dataclasses import ConfigFile, Menu, SubMenu

KIND_MENU = "menu"
KIND_COMMAND = "command"


@dataclass(frozen=True)
class VisibleEntry:
    key: str
    label: str
    kind: str


@dataclass
class MenuView:
    """Everything a renderer needs to draw one menu."""
    title: str
    breadcrumb: str
    entries: list[VisibleEntry] = field(default_factory=list)
    pending: str = ""
    message: Optional[str] = None  # Last navigation error, if any


def visible_entries(menu: Menu, config: ConfigFile) -> list[VisibleEntry]:
    """List a menu's entries in declaration order with their labels."""
    result = []
    for key, entry in menu.entries.items():
        if isinstance(entry, SubMenu):
            title = config.menu(entry.menu_name).display_title
            result.append(VisibleEntry(key, title, KIND_MENU))
        else:
            result.append(VisibleEntry(key, entry.label, KIND_COMMAND))
    return result
