"""
Validation for dotree configurations.

Each check returns a list of error messages (empty if valid); the tree
builder collects them and raises ModelError. Snippet expansion lives here
too since it shares the cycle walk.
"""

from dotree_lib.errors import ModelError

from .dataclasses import Command, Literal, Menu, QuickCommand, SnippetRef, StringExpr, SubMenu


def find_prefix_conflicts(keys: list[str]) -> list[tuple[str, str]]:
    """Return (shorter, longer) pairs where one key is a prefix of another."""
    conflicts = []
    ordered = sorted(keys)
    for i, short in enumerate(ordered):
        for longer in ordered[i + 1:]:
            if longer.startswith(short):
                conflicts.append((short, longer))
            else:
                # Sorted order groups every extension of `short` right after it
                break
    return conflicts


def validate_menu_keys(menu: Menu) -> list[str]:
    """Check that no key in the menu is a prefix of another."""
    return [
        f"menu '{menu.name}': key '{short}' is a prefix of key '{longer}', "
        f"'{longer}' could never be typed"
        for short, longer in find_prefix_conflicts(list(menu.entries))
    ]


def validate_menu_refs(menu: Menu, menus: dict, snippets: dict) -> list[str]:
    """Check that sub-menus and snippets used by the menu's entries exist."""
    errors = []
    for key, entry in menu.entries.items():
        if isinstance(entry, SubMenu):
            if entry.menu_name not in menus:
                errors.append(
                    f"menu '{menu.name}', key '{key}': undefined menu '{entry.menu_name}'"
                )
        elif isinstance(entry, (QuickCommand, Command)):
            for ref in entry.expr.snippet_refs():
                if ref not in snippets:
                    errors.append(
                        f"menu '{menu.name}', key '{key}': undefined snippet '{ref}'"
                    )
    return errors


def validate_snippets(snippets: dict[str, StringExpr]) -> list[str]:
    """Check snippet references for undefined names and cycles."""
    errors = []
    for name, expr in snippets.items():
        for ref in expr.snippet_refs():
            if ref not in snippets:
                errors.append(f"snippet '{name}': undefined snippet '{ref}'")
    if errors:
        return errors

    done: set[str] = set()
    for name in snippets:
        cycle = _find_cycle(name, snippets, [], done)
        if cycle:
            errors.append("snippet cycle: " + " -> ".join(cycle))
            break
    return errors


def _find_cycle(name: str, snippets: dict, stack: list[str], done: set[str]):
    if name in stack:
        return stack[stack.index(name):] + [name]
    if name in done:
        return None
    stack.append(name)
    for ref in snippets[name].snippet_refs():
        cycle = _find_cycle(ref, snippets, stack, done)
        if cycle:
            return cycle
    stack.pop()
    done.add(name)
    return None


def resolve_expr(expr: StringExpr, snippets: dict[str, StringExpr]) -> str:
    """
    Expand snippet references into one flat string.

    Variables are not substituted; `$NAME` inside literals reaches the
    shell untouched.

    Raises:
        ModelError: on an undefined snippet or a reference cycle
    """
    return _resolve(expr, snippets, [])


def _resolve(expr: StringExpr, snippets: dict, parents: list[str]) -> str:
    pieces = []
    for elem in expr.elems:
        if isinstance(elem, Literal):
            pieces.append(elem.value)
            continue
        if not isinstance(elem, SnippetRef):
            raise TypeError(f"unexpected expression element: {elem!r}")
        if elem.name not in snippets:
            raise ModelError(f"undefined snippet '{elem.name}'")
        if elem.name in parents:
            raise ModelError(
                "snippet cycle: " + " -> ".join(parents[parents.index(elem.name):] + [elem.name])
            )
        pieces.append(_resolve(snippets[elem.name], snippets, parents + [elem.name]))
    return "".join(pieces)
