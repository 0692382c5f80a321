"""
Configuration serialization for dotree.

Renders a ConfigFile back into .dt text. Parsing the output yields a model
equal to the input, which makes this useful for normalizing files and for
checking the parser against the builder.
"""

from pathlib import Path

from .dataclasses import (
    Command,
    ConfigFile,
    Literal,
    Menu,
    QuickCommand,
    ShellDef,
    StringExpr,
    SubMenu,
)


def quote(value: str) -> str:
    """Quote a string, falling back to a protected string when needed."""
    if "\\" not in value:
        return '"' + value.replace('"', '\\"') + '"'
    marker = ""
    n = 0
    while f'"{marker}!' in value:
        n += 1
        marker = f"m{n}"
    return f'!{marker}"{value}"{marker}!'


def expr_to_source(expr: StringExpr) -> str:
    parts = []
    for elem in expr.elems:
        if isinstance(elem, Literal):
            parts.append(quote(elem.value))
        else:
            parts.append(f"${elem.name}")
    return " + ".join(parts)


def shell_to_source(shell: ShellDef) -> str:
    return "shell " + " ".join(quote(w) for w in (shell.name, *shell.args))


def _quick_to_source(entry) -> str:
    name = f"{quote(entry.name)} - " if entry.name is not None else ""
    echo = "@" if entry.toggle_echo else ""
    return f"{name}{echo}{expr_to_source(entry.expr)}"


def _command_to_source(cmd: Command, indent: str) -> list[str]:
    inner = indent + "    "
    lines = ["cmd {"]
    if cmd.settings:
        names = sorted(s.value for s in cmd.settings)
        lines.append(f"{inner}set {', '.join(names)}")
    if cmd.variables:
        defs = [
            v.name if v.default is None else f"{v.name}={quote(v.default)}"
            for v in cmd.variables
        ]
        lines.append(f"{inner}vars {', '.join(defs)}")
    if cmd.shell:
        lines.append(inner + shell_to_source(cmd.shell))
    lines.append(inner + _quick_to_source(cmd))
    lines.append(indent + "}")
    return lines


def menu_to_source(menu: Menu) -> str:
    title = f"{quote(menu.title)} " if menu.title is not None else ""
    lines = [f"menu {title}{menu.name} {{"]
    for key, entry in menu.entries.items():
        if isinstance(entry, SubMenu):
            lines.append(f"    {key}: {entry.menu_name}")
        elif isinstance(entry, QuickCommand):
            lines.append(f"    {key}: {_quick_to_source(entry)}")
        elif isinstance(entry, Command):
            body = _command_to_source(entry, "    ")
            lines.append(f"    {key}: {body[0]}")
            lines.extend(body[1:])
    lines.append("}")
    return "\n".join(lines)


def to_source(config: ConfigFile) -> str:
    """Render a configuration as .dt text."""
    blocks = []
    settings = []
    if config.settings.shell:
        settings.append(shell_to_source(config.settings.shell))
    if not config.settings.echo_by_default:
        settings.append("echo off")
    if settings:
        blocks.append("\n".join(settings))

    for name, expr in config.snippets.items():
        blocks.append(f"snippet {name} = {expr_to_source(expr)}")
    for menu in config.menus.values():
        blocks.append(menu_to_source(menu))
    return "\n\n".join(blocks) + "\n"


def save_config(config: ConfigFile, config_file: Path) -> None:
    """Write a configuration to a .dt file."""
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(to_source(config), encoding="utf-8")
