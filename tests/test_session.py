"""Tests for the session loop: key replay, repeat and invalid-key policies."""

import pytest

from dotree_lib.errors import CommandFailure, DotreeError, NoSuchKey
from dotree_lib.repl.session import InvalidKeyPolicy, Session, SessionOptions

from conftest import FakeSpawner, FakeTerminal


def _session(config, terminal, spawner, **options):
    return Session(config, terminal, spawn=spawner, options=SessionOptions(**options))


def test_cli_keys_run_command(git_config, spawner):
    terminal = FakeTerminal(interactive=False)
    assert _session(git_config, terminal, spawner).run("gam") == 0
    assert spawner.calls[0]["argv"] == ["sh", "-c", "git commit --amend --no-edit"]
    assert terminal.views == []
    assert terminal.echoed == ["git commit --amend --no-edit"]


def test_cli_keys_then_interactive_keys(git_config, spawner):
    terminal = FakeTerminal(keys="am")
    _session(git_config, terminal, spawner).run("g")
    assert spawner.commands == ["git commit --amend --no-edit"]
    assert terminal.views[0].title == "Git"


def test_remainder_and_extra_args_fill_variables(git_config, spawner):
    terminal = FakeTerminal(interactive=False)
    _session(git_config, terminal, spawner).run("gcm hello")
    assert spawner.calls[0]["env"]["msg"] == "hello"

    _session(git_config, terminal, spawner, extra_args=["fix it"]).run("gcm")
    assert spawner.calls[1]["env"]["msg"] == "fix it"
    assert terminal.prompts == []


def test_missing_variable_is_prompted(git_config, spawner):
    terminal = FakeTerminal(keys="gcm", lines=["typed"])
    _session(git_config, terminal, spawner).run()
    assert terminal.prompts == [("Value for msg", None)]
    assert spawner.calls[0]["env"]["msg"] == "typed"


def test_repeat_returns_to_command_menu(git_config):
    spawner = FakeSpawner(1)
    terminal = FakeTerminal(keys="crq")
    assert _session(git_config, terminal, spawner).run() == 0
    assert spawner.commands == ["false", "echo quiet"]
    last = terminal.views[-1]
    assert last.title == "custom"
    assert last.breadcrumb == "root > custom"


def test_repeat_needs_interactive_terminal(git_config, spawner):
    terminal = FakeTerminal(interactive=False)
    assert _session(git_config, terminal, spawner).run("cr") == 0
    assert spawner.commands == ["false"]


def test_echo_toggle_in_session(git_config, spawner):
    terminal = FakeTerminal(interactive=False)
    _session(git_config, terminal, spawner).run("cq")
    assert spawner.commands == ["echo quiet"]
    assert terminal.echoed == []


def test_failure_propagates(git_config):
    terminal = FakeTerminal(interactive=False)
    with pytest.raises(CommandFailure) as exc:
        _session(git_config, terminal, FakeSpawner(2)).run("gam")
    assert exc.value.status == 2


def test_invalid_key_stays_in_menu(git_config, spawner):
    terminal = FakeTerminal(keys="gxam")
    _session(git_config, terminal, spawner).run()
    assert spawner.commands == ["git commit --amend --no-edit"]
    assert terminal.views[2].title == "Git"
    assert terminal.views[2].message == "No entry for 'x'"
    assert terminal.views[3].message is None


def test_invalid_key_resets_to_root(git_config, spawner):
    terminal = FakeTerminal(keys="gxcq")
    _session(git_config, terminal, spawner, policy=InvalidKeyPolicy.RESET).run()
    assert spawner.commands == ["echo quiet"]
    assert terminal.views[2].title == "root"


def test_invalid_key_exits(git_config, spawner):
    terminal = FakeTerminal(keys="gx")
    with pytest.raises(NoSuchKey) as exc:
        _session(git_config, terminal, spawner, policy=InvalidKeyPolicy.EXIT).run()
    assert exc.value.keys == "x"
    assert spawner.calls == []


def test_invalid_cli_keys_are_fatal(git_config, spawner):
    with pytest.raises(NoSuchKey) as exc:
        _session(git_config, FakeTerminal(keys="am"), spawner).run("gx")
    assert exc.value.position == 2


def test_incomplete_cli_keys_without_terminal(git_config, spawner):
    with pytest.raises(NoSuchKey) as exc:
        _session(git_config, FakeTerminal(interactive=False), spawner).run("ga")
    assert "incomplete key sequence" in str(exc.value)


def test_no_keys_without_terminal(git_config, spawner):
    with pytest.raises(DotreeError):
        _session(git_config, FakeTerminal(interactive=False), spawner).run()


def test_backspace_in_session(git_config, spawner):
    terminal = FakeTerminal(keys=["g", "a", "\x7f", "s"])
    _session(git_config, terminal, spawner).run()
    assert spawner.commands == ["git status"]


def test_interrupt_propagates(git_config, spawner):
    terminal = FakeTerminal(keys="g")
    with pytest.raises(KeyboardInterrupt):
        _session(git_config, terminal, spawner).run()
    assert spawner.calls == []


def test_policy_resolution():
    assert InvalidKeyPolicy.resolve(None, {}) is InvalidKeyPolicy.STAY
    assert InvalidKeyPolicy.resolve(None, {"DT_ON_INVALID_KEY": "Reset"}) is InvalidKeyPolicy.RESET
    assert InvalidKeyPolicy.resolve("exit", {"DT_ON_INVALID_KEY": "reset"}) is InvalidKeyPolicy.EXIT
    with pytest.raises(DotreeError):
        InvalidKeyPolicy.resolve("explode", {})


def test_unbalanced_quote_in_remainder(git_config, spawner):
    with pytest.raises(DotreeError) as exc:
        _session(git_config, FakeTerminal(interactive=False), spawner).run("gcm it's")
    assert "No closing quotation" in str(exc.value)
    assert spawner.calls == []
