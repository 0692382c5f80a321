"""
Semantic model of a dotree configuration.

These define the structure the navigation engine and the execution stage
work on. Menus live in one table keyed by name and sub-menu entries refer
to them by name, so a configuration is a graph: menus may be shared and
may even form cycles.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class CommandSetting(Enum):
    """Per-command flags set with `set ...` inside a `cmd { }` block."""
    REPEAT = "repeat"
    IGNORE_RESULT = "ignore_result"


@dataclass(frozen=True)
class ShellDef:
    """A shell invocation; the command string is appended as last argument."""
    name: str
    args: tuple[str, ...] = ()

    @classmethod
    def from_words(cls, words: list[str]) -> "ShellDef":
        return cls(name=words[0], args=tuple(words[1:]))

    @classmethod
    def platform_default(cls) -> "ShellDef":
        if os.name == "nt":
            return cls(name="cmd", args=("/c",))
        return cls(name="bash", args=("-euo", "pipefail", "-c"))

    def argv(self, command: str) -> list[str]:
        return [self.name, *self.args, command]

    def __str__(self) -> str:
        return " ".join([self.name, *self.args])


@dataclass(frozen=True)
class VarDef:
    """A command variable, exported to the shell under its own name."""
    name: str
    default: Optional[str] = None


@dataclass(frozen=True)
class Literal:
    value: str


@dataclass(frozen=True)
class SnippetRef:
    name: str


StringExprElem = Union[Literal, SnippetRef]


@dataclass(frozen=True)
class StringExpr:
    """Literal pieces and snippet references, concatenated left to right."""
    elems: tuple[StringExprElem, ...]

    def snippet_refs(self) -> list[str]:
        return [e.name for e in self.elems if isinstance(e, SnippetRef)]

    def __str__(self) -> str:
        if len(self.elems) == 1 and isinstance(self.elems[0], Literal):
            return self.elems[0].value
        parts = []
        for elem in self.elems:
            if isinstance(elem, SnippetRef):
                parts.append(f"${elem.name}")
            else:
                parts.append(f'"{elem.value}"')
        return " + ".join(parts)


@dataclass(frozen=True)
class SubMenu:
    """Entry that switches to another menu, referenced by name."""
    menu_name: str


@dataclass(frozen=True)
class QuickCommand:
    """Inline command: a string expression with an optional display name."""
    expr: StringExpr
    name: Optional[str] = None
    toggle_echo: bool = False

    @property
    def label(self) -> str:
        return self.name if self.name is not None else str(self.expr)


@dataclass(frozen=True)
class Command:
    """Full `cmd { }` definition."""
    expr: StringExpr
    name: Optional[str] = None
    settings: frozenset[CommandSetting] = frozenset()
    variables: tuple[VarDef, ...] = ()
    shell: Optional[ShellDef] = None
    toggle_echo: bool = False

    @property
    def label(self) -> str:
        return self.name if self.name is not None else str(self.expr)

    @property
    def repeat(self) -> bool:
        return CommandSetting.REPEAT in self.settings

    @property
    def ignore_result(self) -> bool:
        return CommandSetting.IGNORE_RESULT in self.settings


Entry = Union[SubMenu, QuickCommand, Command]


@dataclass(frozen=True)
class Menu:
    """A named set of keyed entries, in declaration order."""
    name: str
    title: Optional[str] = None
    entries: dict[str, Entry] = field(default_factory=dict)

    @property
    def display_title(self) -> str:
        return self.title if self.title is not None else self.name


@dataclass(frozen=True)
class Settings:
    """File-level settings, given before the first menu or snippet."""
    shell: Optional[ShellDef] = None
    echo_by_default: bool = True


@dataclass(frozen=True)
class ConfigFile:
    """A parsed and validated configuration. Never mutated after loading."""
    menus: dict[str, Menu]
    snippets: dict[str, StringExpr] = field(default_factory=dict)
    settings: Settings = field(default_factory=Settings)

    @property
    def root(self) -> Menu:
        return self.menus["root"]

    def menu(self, name: str) -> Menu:
        return self.menus[name]
