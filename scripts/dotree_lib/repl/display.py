"""
Menu rendering for the dotree terminal.

Builds prompt_toolkit formatted text from a MenuView: breadcrumb, one
line per entry, the last navigation error and the pending keys.
"""

from prompt_toolkit.styles import Style

from .menu import KIND_MENU, MenuView, VisibleEntry

DT_STYLE = Style.from_dict({
    'breadcrumb': '#0088ff bold',
    'key': '#00aa00 bold',
    'key.dim': '#444444',
    'submenu': '#0088ff',
    'command': '',
    'pending': '#ffaa00 bold',
    'error': '#ff0000 bold',
    'info': '#888888',
})


def entry_label(entry: VisibleEntry) -> str:
    """One-line label; multi-line commands show their first line."""
    lines = entry.label.splitlines() or [""]
    label = lines[0] + (" ..." if len(lines) > 1 else "")
    if entry.kind == KIND_MENU:
        label += "/"
    return label


def menu_fragments(view: MenuView) -> list[tuple[str, str]]:
    """Formatted text (style, text) pairs for one menu."""
    fragments = [("class:breadcrumb", view.breadcrumb), ("", "\n")]
    width = max((len(e.key) for e in view.entries), default=0)
    for entry in view.entries:
        reachable = entry.key.startswith(view.pending)
        key_style = "class:key" if reachable else "class:key.dim"
        label_style = "class:submenu" if entry.kind == KIND_MENU else "class:command"
        if not reachable:
            label_style = "class:info"
        fragments.extend([
            ("", "  "),
            (key_style, entry.key.ljust(width)),
            ("", "  "),
            (label_style, entry_label(entry)),
            ("", "\n"),
        ])
    if view.message:
        fragments.append(("class:error", view.message + "\n"))
    if view.pending:
        fragments.append(("class:pending", view.pending))
    return fragments
