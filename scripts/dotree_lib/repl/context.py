"""
Navigation state and prompt utilities for dotree.

This module contains:
- NavigationState: current menu, pending keys and the path of menus entered
- get_prompt_text: breadcrumb string for the current position
"""

from dataclasses import dataclass, field

from dotree_lib.config.dataclasses import ConfigFile


@dataclass
class NavigationState:
    """Tracks current position in the menu graph and the typed key buffer."""
    menu: str = "root"
    pending: str = ""
    path: list[str] = field(default_factory=list)  # Menus entered below root
    consumed: int = 0  # Characters consumed since the session started


def get_prompt_text(state: NavigationState, config: ConfigFile) -> str:
    """Generate the breadcrumb shown above the current menu."""
    titles = [config.root.display_title]
    titles.extend(config.menu(name).display_title for name in state.path)
    return " > ".join(titles)
