"""
Tree builder: turns the parser's syntax tree into a ConfigFile.

The builder is a pure transformation. It collects every semantic problem
it can find and raises a single ModelError listing them.
"""

import logging
from typing import Optional

from dotree_lib.errors import ModelError

from .dataclasses import (
    Command,
    CommandSetting,
    ConfigFile,
    Entry,
    Literal,
    Menu,
    QuickCommand,
    Settings,
    ShellDef,
    SnippetRef,
    StringExpr,
    SubMenu,
    VarDef,
)
from .syntax import (
    AnonCommandNode,
    EchoSettingNode,
    FileNode,
    MenuNode,
    QuickCommandNode,
    ShellDefNode,
    SnippetNode,
    StringExprNode,
    StringNode,
    SymbolNode,
)
from .validation import validate_menu_keys, validate_menu_refs, validate_snippets

logger = logging.getLogger(__name__)

ROOT_MENU = "root"


def build_config(tree: FileNode) -> ConfigFile:
    """
    Build the semantic model from a syntax tree.

    Raises:
        ModelError: if any menu, entry, snippet or setting is invalid
    """
    errors: list[str] = []

    settings = _build_settings(tree, errors)

    snippets: dict[str, StringExpr] = {}
    menus: dict[str, Menu] = {}
    for item in tree.items:
        if isinstance(item, SnippetNode):
            if item.name in snippets:
                errors.append(f"{item.pos}: duplicate snippet '{item.name}'")
                continue
            snippets[item.name] = build_string_expr(item.expr)
        elif isinstance(item, MenuNode):
            if item.name in menus:
                errors.append(f"{item.pos}: duplicate menu '{item.name}'")
                continue
            menus[item.name] = _build_menu(item, errors)

    if ROOT_MENU not in menus:
        errors.append(f"missing '{ROOT_MENU}' menu")

    for menu in menus.values():
        errors.extend(validate_menu_keys(menu))
        errors.extend(validate_menu_refs(menu, menus, snippets))
    errors.extend(validate_snippets(snippets))

    if errors:
        raise ModelError("invalid configuration:\n  " + "\n  ".join(errors))

    logger.debug("built %d menus and %d snippets", len(menus), len(snippets))
    return ConfigFile(menus=menus, snippets=snippets, settings=settings)


def _build_settings(tree: FileNode, errors: list[str]) -> Settings:
    shell: Optional[ShellDef] = None
    echo: Optional[bool] = None
    for node in tree.settings:
        if isinstance(node, ShellDefNode):
            if shell is not None:
                errors.append(f"{node.pos}: 'shell' is set more than once")
            shell = ShellDef.from_words(node.words)
        elif isinstance(node, EchoSettingNode):
            if echo is not None:
                errors.append(f"{node.pos}: 'echo' is set more than once")
            echo = node.on
    return Settings(shell=shell, echo_by_default=True if echo is None else echo)


def _build_menu(node: MenuNode, errors: list[str]) -> Menu:
    entries: dict[str, Entry] = {}
    for entry in node.entries:
        if entry.key in entries:
            errors.append(f"{entry.pos}: menu '{node.name}': duplicate key '{entry.key}'")
            continue
        value = entry.value
        if isinstance(value, SymbolNode):
            entries[entry.key] = SubMenu(menu_name=value.name)
        elif isinstance(value, QuickCommandNode):
            entries[entry.key] = build_quick_command(value)
        elif isinstance(value, AnonCommandNode):
            entries[entry.key] = _build_command(value, node.name, entry.key, errors)
        else:
            raise TypeError(f"unexpected entry node: {value!r}")
    return Menu(name=node.name, title=node.title, entries=entries)


def build_quick_command(node: QuickCommandNode) -> QuickCommand:
    return QuickCommand(
        expr=build_string_expr(node.expr),
        name=node.name,
        toggle_echo=node.toggle_echo,
    )


def _build_command(node: AnonCommandNode, menu: str, key: str, errors: list[str]) -> Command:
    where = f"{node.pos}: menu '{menu}', key '{key}'"
    for clause, blocks in (("set", node.settings), ("vars", node.vars), ("shell", node.shells)):
        if len(blocks) > 1:
            errors.append(f"{where}: '{clause}' given more than once")

    settings = set()
    for block in node.settings:
        for symbol in block:
            try:
                settings.add(CommandSetting(symbol.name))
            except ValueError:
                errors.append(f"{symbol.pos}: unknown command setting '{symbol.name}'")

    variables = []
    seen = set()
    for block in node.vars:
        for var in block:
            if var.name in seen:
                errors.append(f"{var.pos}: variable '{var.name}' declared twice")
                continue
            seen.add(var.name)
            variables.append(VarDef(name=var.name, default=var.default))

    shell = ShellDef.from_words(node.shells[-1].words) if node.shells else None
    return Command(
        expr=build_string_expr(node.quick.expr),
        name=node.quick.name,
        settings=frozenset(settings),
        variables=tuple(variables),
        shell=shell,
        toggle_echo=node.quick.toggle_echo,
    )


def build_string_expr(node: StringExprNode) -> StringExpr:
    elems = []
    for elem in node.elems:
        if isinstance(elem, StringNode):
            elems.append(Literal(elem.value))
        else:
            elems.append(SnippetRef(elem.name))
    return StringExpr(elems=tuple(elems))
