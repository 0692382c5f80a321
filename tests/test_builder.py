"""Tests for building the semantic model from parsed configuration text."""

import pytest

from dotree_lib.config import (
    Command,
    CommandSetting,
    Literal,
    QuickCommand,
    ShellDef,
    SnippetRef,
    StringExpr,
    SubMenu,
    VarDef,
    find_prefix_conflicts,
    load_config_text,
    resolve_expr,
)
from dotree_lib.errors import ModelError


EXAMPLE = """
menu root {
    g: git
    c: custom_commands
}

menu git {
    am: "git commit --amend --no-edit"
    b: "git checkout -b"
}

menu custom_commands {
    h: "print hi" - !"echo hi"!
}
"""


def test_builds_menus_in_declaration_order():
    config = load_config_text(EXAMPLE)
    assert list(config.menus) == ["root", "git", "custom_commands"]
    assert list(config.root.entries) == ["g", "c"]
    assert config.root.entries["g"] == SubMenu("git")

    amend = config.menu("git").entries["am"]
    assert isinstance(amend, QuickCommand)
    assert amend.label == "git commit --amend --no-edit"

    hi = config.menu("custom_commands").entries["h"]
    assert hi.name == "print hi"
    assert hi.label == "print hi"


def test_default_settings():
    config = load_config_text(EXAMPLE)
    assert config.settings.shell is None
    assert config.settings.echo_by_default is True


def test_file_settings():
    config = load_config_text('shell zsh -c\necho off\nmenu root { a: "x" }')
    assert config.settings.shell == ShellDef("zsh", ("-c",))
    assert config.settings.echo_by_default is False


def test_full_command():
    config = load_config_text("""
        menu root {
            d: cmd {
                set repeat
                vars target, mode = "fast"
                shell fish -c
                "deploy" - @"./deploy $target $mode"
            }
        }
    """)
    cmd = config.root.entries["d"]
    assert isinstance(cmd, Command)
    assert cmd.name == "deploy"
    assert cmd.repeat and not cmd.ignore_result
    assert cmd.settings == frozenset({CommandSetting.REPEAT})
    assert cmd.variables == (VarDef("target"), VarDef("mode", "fast"))
    assert cmd.shell == ShellDef("fish", ("-c",))
    assert cmd.toggle_echo is True


def test_prefix_keys_are_rejected():
    with pytest.raises(ModelError) as exc:
        load_config_text('menu root {\n  g: "git"\n  gb: "git branch"\n}')
    assert "'g' is a prefix of key 'gb'" in str(exc.value)


def test_keys_in_different_menus_may_share_prefixes():
    config = load_config_text("""
        menu root { g: git  x: "git branch" }
        menu git { g: "git grep"  xb: git }
    """)
    assert list(config.root.entries) == ["g", "x"]


def test_find_prefix_conflicts():
    assert find_prefix_conflicts(["a", "ab", "abc", "b"]) == [
        ("a", "ab"), ("a", "abc"), ("ab", "abc"),
    ]
    assert find_prefix_conflicts(["ab", "ba", "c"]) == []


def test_duplicate_key():
    with pytest.raises(ModelError) as exc:
        load_config_text('menu root {\n  a: "x"\n  a: "y"\n}')
    assert "duplicate key 'a'" in str(exc.value)


def test_duplicate_menu_and_snippet():
    with pytest.raises(ModelError) as exc:
        load_config_text("""
            snippet s = "a"
            snippet s = "b"
            menu root { a: "x" }
            menu root { b: "y" }
        """)
    message = str(exc.value)
    assert "duplicate snippet 's'" in message
    assert "duplicate menu 'root'" in message


def test_missing_root_menu():
    with pytest.raises(ModelError) as exc:
        load_config_text('menu main { a: "x" }')
    assert "missing 'root' menu" in str(exc.value)


def test_undefined_menu():
    with pytest.raises(ModelError) as exc:
        load_config_text("menu root { g: gti }")
    assert "undefined menu 'gti'" in str(exc.value)


def test_undefined_snippet_in_entry():
    with pytest.raises(ModelError) as exc:
        load_config_text('menu root { a: $nope + "x" }')
    assert "undefined snippet 'nope'" in str(exc.value)


def test_snippet_cycle():
    with pytest.raises(ModelError) as exc:
        load_config_text("""
            snippet a = $b + "1"
            snippet b = $a
            menu root { x: $a }
        """)
    assert "snippet cycle: a -> b -> a" in str(exc.value)


def test_unknown_command_setting():
    with pytest.raises(ModelError) as exc:
        load_config_text('menu root { a: cmd {\n set repeat, forever\n "x"\n} }')
    assert "unknown command setting 'forever'" in str(exc.value)


def test_repeated_clause_and_variable():
    with pytest.raises(ModelError) as exc:
        load_config_text("""
            menu root {
                a: cmd {
                    vars x, x
                    vars y
                    "echo $x"
                }
            }
        """)
    message = str(exc.value)
    assert "variable 'x' declared twice" in message
    assert "'vars' given more than once" in message


def test_repeated_file_settings():
    with pytest.raises(ModelError) as exc:
        load_config_text('echo on\necho off\nmenu root { a: "x" }')
    assert "'echo' is set more than once" in str(exc.value)


def test_all_problems_are_reported_together():
    with pytest.raises(ModelError) as exc:
        load_config_text('menu root {\n  g: nowhere\n  a: "x"\n  ab: "y"\n}')
    message = str(exc.value)
    assert "undefined menu 'nowhere'" in message
    assert "'a' is a prefix of key 'ab'" in message


def test_shared_and_cyclic_menus():
    config = load_config_text("""
        menu root { a: left  b: right }
        menu left { s: shared  u: root }
        menu right { s: shared }
        menu shared { x: "echo x" }
    """)
    assert config.menu("left").entries["s"] == config.menu("right").entries["s"]
    assert config.menu("left").entries["u"] == SubMenu("root")


def test_snippets_are_kept_unresolved():
    config = load_config_text("""
        snippet env = !"X=1 "!
        menu root { a: $env + "echo $X" }
    """)
    expr = config.root.entries["a"].expr
    assert expr.elems == (SnippetRef("env"), Literal("echo $X"))
    assert resolve_expr(expr, config.snippets) == "X=1 echo $X"


def test_resolve_nested_snippets():
    config = load_config_text("""
        snippet base = "cd /tmp && "
        snippet ls = $base + "ls"
        menu root { l: $ls + " -la" }
    """)
    assert resolve_expr(config.root.entries["l"].expr, config.snippets) == "cd /tmp && ls -la"


def test_resolve_rejects_unknown_elements():
    with pytest.raises(TypeError):
        resolve_expr(StringExpr(elems=("raw text",)), {})
