"""
Recursive-descent parser for the .dt configuration language.

The grammar is small and LL-friendly, so each rule is a method that either
returns a node, returns None without consuming input (the rule does not
start here), or raises once the rule has committed. Every failed lookahead
records what was expected at that offset; errors report the furthest offset
reached together with everything that would have been accepted there.

    file        := setting* (menu | snippet)+
    setting     := shell_def | echo_setting
    shell_def   := "shell" (string | word)+
    echo_setting:= "echo" ("on" | "off")
    menu        := "menu" string? symbol "{" entry+ "}"
    entry       := keydef ":" (anon_command | quick_command | symbol)
    anon_command:= "cmd" "{" cmd_body "}"
    cmd_body    := (cmd_settings | vars_def | shell_def)* quick_command
    cmd_settings:= "set" symbol ("," symbol)*
    vars_def    := "vars" var_def ("," var_def)*
    var_def     := symbol ("=" string)?
    quick_command := command_name? "@"? string_expr
    command_name:= string "-"
    string_expr := string_expr_elem ("+" string_expr_elem)*
    string_expr_elem := string | ("$" symbol)
    snippet     := "snippet" symbol "=" string_expr
"""

import logging
import re
from typing import NoReturn, Optional, Union

from dotree_lib.errors import ConfigSyntaxError

from .syntax import (
    AnonCommandNode,
    EchoSettingNode,
    EntryNode,
    EntryValueNode,
    FileNode,
    MenuNode,
    Position,
    QuickCommandNode,
    SettingNode,
    ShellDefNode,
    SnippetNode,
    SnippetSymbolNode,
    StringExprElemNode,
    StringExprNode,
    StringNode,
    SymbolNode,
    VarDefNode,
)

logger = logging.getLogger(__name__)

SYMBOL_RE = re.compile(r"[A-Za-z0-9_]+")
KEYDEF_RE = re.compile(r"[^:\s]+")
WORD_RE = re.compile(r"\S+")
MARKER_RE = re.compile(r'[^"\s]*')


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.furthest = 0
        self.expected: set[str] = set()

    # -------------------------------------------------------------------
    # Error bookkeeping
    # -------------------------------------------------------------------

    def _expect_at(self, offset: int, what: str) -> None:
        if offset > self.furthest:
            self.furthest = offset
            self.expected = {what}
        elif offset == self.furthest:
            self.expected.add(what)

    def _expect(self, what: str) -> None:
        self._expect_at(self.pos, what)

    def _fail(self, what: Optional[str] = None) -> NoReturn:
        if what:
            self._expect(what)
        line, column = self._line_col(self.furthest)
        lines = self.text.splitlines()
        source_line = lines[line - 1] if line - 1 < len(lines) else ""
        expected = sorted(self.expected) or ["end of input"]
        raise ConfigSyntaxError(line, column, expected, source_line)

    def _line_col(self, offset: int) -> tuple[int, int]:
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def _position(self) -> Position:
        return Position(*self._line_col(self.pos))

    # -------------------------------------------------------------------
    # Lexical helpers
    # -------------------------------------------------------------------

    def _skip(self, newlines: bool = True) -> None:
        """Skip blanks and comments, and newlines unless told otherwise."""
        text = self.text
        blanks = " \t\r\n" if newlines else " \t"
        while self.pos < len(text):
            ch = text[self.pos]
            if ch in blanks:
                self.pos += 1
            elif ch == "#":
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end
            else:
                break

    def _at_line_end(self) -> bool:
        return self.pos >= len(self.text) or self.text[self.pos] in "\r\n"

    def _literal(self, token: str, newlines: bool = True) -> bool:
        self._skip(newlines)
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        self._expect(f'"{token}"')
        return False

    def _keyword(self, word: str, newlines: bool = True) -> bool:
        self._skip(newlines)
        end = self.pos + len(word)
        if self.text.startswith(word, self.pos) and not SYMBOL_RE.match(self.text, end):
            self.pos = end
            return True
        self._expect(f'"{word}"')
        return False

    def _symbol(self, what: str = "symbol") -> Optional[SymbolNode]:
        self._skip()
        m = SYMBOL_RE.match(self.text, self.pos)
        if not m:
            self._expect(what)
            return None
        node = SymbolNode(m.group(), self._position())
        self.pos = m.end()
        return node

    def _protected_open(self) -> Optional[re.Match]:
        """Match `!<marker>"` at the current offset."""
        if not self.text.startswith("!", self.pos):
            return None
        m = MARKER_RE.match(self.text, self.pos + 1)
        if m.end() < len(self.text) and self.text[m.end()] == '"':
            return m
        return None

    def _string(self, newlines: bool = True) -> Optional[StringNode]:
        self._skip(newlines)
        pos = self._position()
        if self.text.startswith('"', self.pos):
            return StringNode(self._normal_string(), pos)
        opening = self._protected_open()
        if opening:
            return StringNode(self._protected_string(opening), pos)
        self._expect("string")
        return None

    def _normal_string(self) -> str:
        text = self.text
        i = self.pos + 1
        chars = []
        while i < len(text):
            ch = text[i]
            if ch == "\\" and text.startswith('"', i + 1):
                chars.append('"')
                i += 2
            elif ch == '"':
                self.pos = i + 1
                return "".join(chars)
            else:
                chars.append(ch)
                i += 1
        self.pos = len(text)
        self._fail('closing \'"\'')

    def _protected_string(self, opening: re.Match) -> str:
        marker = opening.group()
        closing = f'"{marker}!'
        start = opening.end() + 1
        end = self.text.find(closing, start)
        if end == -1:
            self.pos = len(self.text)
            self._fail(f"closing '{closing}'")
        self.pos = end + len(closing)
        return self.text[start:end]

    # -------------------------------------------------------------------
    # Grammar rules
    # -------------------------------------------------------------------

    def file(self) -> FileNode:
        settings: list[SettingNode] = []
        while True:
            setting = self._setting()
            if setting is None:
                break
            settings.append(setting)

        items: list[Union[MenuNode, SnippetNode]] = []
        while True:
            item = self._menu() or self._snippet()
            if item is None:
                break
            items.append(item)

        self._skip()
        if not items or self.pos < len(self.text):
            self._fail()
        return FileNode(settings=settings, items=items)

    def _setting(self) -> Optional[SettingNode]:
        return self._shell_def() or self._echo_setting()

    def _shell_def(self) -> Optional[ShellDefNode]:
        self._skip()
        pos = self._position()
        if not self._keyword("shell"):
            return None
        words = self.shell_words()
        return ShellDefNode(words=words, pos=pos)

    def shell_words(self) -> list[str]:
        """Words of a shell invocation, up to the end of the line."""
        words = []
        while True:
            self._skip(newlines=False)
            if self._at_line_end():
                break
            if self.text.startswith('"', self.pos):
                words.append(self._normal_string())
                continue
            opening = self._protected_open()
            if opening:
                words.append(self._protected_string(opening))
                continue
            m = WORD_RE.match(self.text, self.pos)
            words.append(m.group())
            self.pos = m.end()
        if not words:
            self._fail("shell program")
        return words

    def _echo_setting(self) -> Optional[EchoSettingNode]:
        self._skip()
        pos = self._position()
        if not self._keyword("echo"):
            return None
        if self._keyword("on"):
            return EchoSettingNode(on=True, pos=pos)
        if self._keyword("off"):
            return EchoSettingNode(on=False, pos=pos)
        self._fail()

    def _menu(self) -> Optional[MenuNode]:
        self._skip()
        pos = self._position()
        if not self._keyword("menu"):
            return None
        title = self._string()
        name = self._symbol("menu name") or self._fail()
        if not self._literal("{"):
            self._fail()

        entries = []
        while True:
            entry = self._entry()
            if entry is None:
                break
            entries.append(entry)
        if not entries:
            self._fail()
        if not self._literal("}"):
            self._fail()
        return MenuNode(
            name=name.name,
            title=title.value if title else None,
            entries=entries,
            pos=pos,
        )

    def _entry(self) -> Optional[EntryNode]:
        self._skip()
        pos = self._position()
        m = KEYDEF_RE.match(self.text, self.pos)
        if not m:
            self._expect("key")
            return None
        save = self.pos
        self.pos = m.end()
        self._skip(newlines=False)
        if not self.text.startswith(":", self.pos):
            # Not an entry; most likely the closing brace of the menu.
            if not m.group().startswith("}"):
                self._expect('":"')
            self.pos = save
            self._expect("key")
            return None
        self.pos += 1
        value = self._entry_value()
        return EntryNode(key=m.group(), value=value, pos=pos)

    def _entry_value(self) -> EntryValueNode:
        value = self._anon_command() or self._quick_command() or self._symbol("menu name")
        if value is None:
            self._fail()
        return value

    def _anon_command(self) -> Optional[AnonCommandNode]:
        self._skip()
        save = self.pos
        pos = self._position()
        if not self._keyword("cmd"):
            return None
        if not self._literal("{"):
            self.pos = save
            return None

        settings: list[list[SymbolNode]] = []
        var_blocks: list[list[VarDefNode]] = []
        shells: list[ShellDefNode] = []
        while True:
            if self._keyword("set"):
                settings.append(self._comma_list(lambda: self._symbol("setting name")))
            elif self._keyword("vars"):
                var_blocks.append(self._comma_list(self._var_def))
            else:
                shell = self._shell_def()
                if shell is None:
                    break
                shells.append(shell)

        quick = self._quick_command() or self._fail()
        if not self._literal("}"):
            self._fail()
        return AnonCommandNode(quick=quick, settings=settings, vars=var_blocks,
                               shells=shells, pos=pos)

    def _comma_list(self, item):
        first = item() or self._fail()
        items = [first]
        while self._literal(","):
            items.append(item() or self._fail())
        return items

    def _var_def(self) -> Optional[VarDefNode]:
        name = self._symbol("variable name")
        if name is None:
            return None
        default = None
        if self._literal("="):
            value = self._string() or self._fail()
            default = value.value
        return VarDefNode(name=name.name, default=default, pos=name.pos)

    def _quick_command(self) -> Optional[QuickCommandNode]:
        self._skip()
        save = self.pos
        name = None
        first = self._string()
        if first is not None and self._literal("-", newlines=False):
            name = first.value
            first = None

        toggle_echo = False
        if first is None:
            toggle_echo = self._literal("@")

        expr = self._string_expr(first)
        if expr is None:
            if name is None and not toggle_echo:
                self.pos = save
                return None
            self._fail()
        return QuickCommandNode(expr=expr, name=name, toggle_echo=toggle_echo)

    def string_expr(self, first: Optional[StringExprElemNode] = None) -> Optional[StringExprNode]:
        return self._string_expr(first)

    def _string_expr(self, first: Optional[StringExprElemNode] = None) -> Optional[StringExprNode]:
        elem = first or self._string_expr_elem()
        if elem is None:
            return None
        elems = [elem]
        while self._literal("+", newlines=False):
            elems.append(self._string_expr_elem() or self._fail())
        return StringExprNode(elems=elems, pos=elems[0].pos)

    def _string_expr_elem(self) -> Optional[StringExprElemNode]:
        string = self._string()
        if string is not None:
            return string
        pos = self._position()
        if not self.text.startswith("$", self.pos):
            self._expect('"$"')
            return None
        m = SYMBOL_RE.match(self.text, self.pos + 1)
        if not m:
            self._expect_at(self.pos + 1, "snippet name")
            self._fail()
        self.pos = m.end()
        return SnippetSymbolNode(name=m.group(), pos=pos)

    def _snippet(self) -> Optional[SnippetNode]:
        self._skip()
        pos = self._position()
        if not self._keyword("snippet"):
            return None
        name = self._symbol("snippet name") or self._fail()
        if not self._literal("="):
            self._fail()
        expr = self._string_expr() or self._fail()
        return SnippetNode(name=name.name, expr=expr, pos=pos)

    def end(self) -> None:
        self._skip()
        if self.pos < len(self.text):
            self._fail("end of input")


def parse(text: str) -> FileNode:
    """
    Parse configuration text into a syntax tree.

    Raises:
        ConfigSyntaxError: at the furthest position the parser reached
    """
    tree = _Parser(text).file()
    logger.debug("parsed %d settings, %d menus/snippets", len(tree.settings), len(tree.items))
    return tree


def parse_shell_words(text: str) -> list[str]:
    """Tokenize a bare shell invocation such as `bash -euo pipefail -c`."""
    parser = _Parser(text.strip())
    words = parser.shell_words()
    parser.end()
    return words


def parse_string_expr(text: str) -> StringExprNode:
    """Parse a standalone string expression such as `$a + "b"`."""
    parser = _Parser(text)
    expr = parser.string_expr()
    if expr is None:
        parser._fail()
    parser.end()
    return expr
