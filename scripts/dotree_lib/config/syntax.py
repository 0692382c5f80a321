"""
Syntax tree produced by the .dt parser.

Nodes keep the source position (line, column) of the construct they were
parsed from so the tree builder can point at the offending text.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Position:
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass
class StringNode:
    """A normal or protected string, already unescaped."""
    value: str
    pos: Position


@dataclass
class SnippetSymbolNode:
    """A `$name` reference inside a string expression."""
    name: str
    pos: Position


StringExprElemNode = Union[StringNode, SnippetSymbolNode]


@dataclass
class StringExprNode:
    elems: list[StringExprElemNode]
    pos: Position


@dataclass
class ShellDefNode:
    words: list[str]
    pos: Position


@dataclass
class EchoSettingNode:
    on: bool
    pos: Position


@dataclass
class VarDefNode:
    name: str
    default: Optional[str]
    pos: Position


@dataclass
class SymbolNode:
    name: str
    pos: Position


@dataclass
class QuickCommandNode:
    expr: StringExprNode
    name: Optional[str] = None
    toggle_echo: bool = False


@dataclass
class AnonCommandNode:
    """Body of a `cmd { ... }` block, clauses in source order."""
    quick: QuickCommandNode
    settings: list[list[SymbolNode]] = field(default_factory=list)
    vars: list[list[VarDefNode]] = field(default_factory=list)
    shells: list[ShellDefNode] = field(default_factory=list)
    pos: Optional[Position] = None


EntryValueNode = Union[SymbolNode, QuickCommandNode, AnonCommandNode]


@dataclass
class EntryNode:
    key: str
    value: EntryValueNode
    pos: Position


@dataclass
class MenuNode:
    name: str
    title: Optional[str]
    entries: list[EntryNode]
    pos: Position


@dataclass
class SnippetNode:
    name: str
    expr: StringExprNode
    pos: Position


SettingNode = Union[ShellDefNode, EchoSettingNode]


@dataclass
class FileNode:
    settings: list[SettingNode]
    items: list[Union[MenuNode, SnippetNode]]
