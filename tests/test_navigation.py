"""Tests for key matching and the navigation state machine."""

import pytest

from dotree_lib.config import load_config_text
from dotree_lib.errors import NoSuchKey
from dotree_lib.repl.menu import KIND_COMMAND, KIND_MENU, VisibleEntry
from dotree_lib.repl.navigation import MatchKind, Navigator, match_key


def test_match_key(git_config):
    git = git_config.menu("git")
    assert match_key(git, "am").kind is MatchKind.MATCH
    assert match_key(git, "am").key == "am"

    pending = match_key(git, "a")
    assert pending.kind is MatchKind.PENDING
    assert pending.candidates == ["am"]

    none = match_key(git, "ax")
    assert none.kind is MatchKind.NONE
    assert none.valid_prefix == 1


def test_match_key_with_trailing_input(git_config):
    result = match_key(git_config.menu("git"), "am now")
    assert result.kind is MatchKind.MATCH
    assert result.key == "am"


def test_feed_whole_sequence(git_config):
    nav = Navigator(git_config)
    dispatch = nav.feed("gam")
    assert dispatch.key == "am"
    assert dispatch.menu == "git"
    assert dispatch.path == ("git",)
    assert dispatch.remainder == ""
    assert str(dispatch.entry.expr) == "git commit --amend --no-edit"


def test_feed_one_key_at_a_time(git_config):
    nav = Navigator(git_config)
    assert nav.feed("g") is None
    assert nav.current_menu.name == "git"
    assert nav.feed("a") is None
    assert nav.pending == "a"
    dispatch = nav.feed("m")
    assert dispatch.key == "am"
    assert nav.pending == ""


def test_feed_keeps_remainder(git_config):
    dispatch = Navigator(git_config).feed("gcm fix the build")
    assert dispatch.menu == "commit"
    assert dispatch.path == ("git", "commit")
    assert dispatch.remainder == " fix the build"


def test_invalid_key_position(git_config):
    nav = Navigator(git_config)
    with pytest.raises(NoSuchKey) as exc:
        nav.feed("gx")
    assert exc.value.menu == "git"
    assert exc.value.keys == "x"
    assert exc.value.position == 2


def test_invalid_key_after_partial_match(git_config):
    with pytest.raises(NoSuchKey) as exc:
        Navigator(git_config).feed("gaz")
    assert exc.value.keys == "az"
    assert exc.value.position == 3


def test_backspace_and_clear(git_config):
    nav = Navigator(git_config)
    nav.feed("g")
    nav.feed("a")
    nav.backspace()
    assert nav.pending == ""
    nav.backspace()
    assert nav.pending == ""
    assert nav.current_menu.name == "git"


def test_reset_and_enter(git_config):
    nav = Navigator(git_config)
    nav.feed("gc")
    assert nav.current_menu.name == "commit"
    nav.reset()
    assert nav.current_menu.name == "root"
    nav.enter("custom", ("custom",))
    assert nav.view().breadcrumb == "root > custom"


def test_view(git_config):
    nav = Navigator(git_config)
    assert nav.view().entries == [
        VisibleEntry("g", "Git", KIND_MENU),
        VisibleEntry("c", "custom", KIND_MENU),
    ]
    nav.feed("gc")
    view = nav.view("oops")
    assert view.title == "commit"
    assert view.breadcrumb == "root > Git > commit"
    assert view.message == "oops"
    assert [e.kind for e in view.entries] == [KIND_COMMAND, KIND_COMMAND]


def test_cyclic_menus_can_be_walked():
    config = load_config_text("""
        menu root { a: other  x: "echo x" }
        menu other { b: root }
    """)
    dispatch = Navigator(config).feed("ababx")
    assert dispatch.key == "x"
    assert dispatch.path == ("other", "root", "other", "root")
