"""
Shared fixtures for dotree tests.

The terminal and the process spawner are replaced by fakes so tests never
touch a TTY or start real processes (except test_cli, which runs `sh`).
"""

from typing import Optional

import pytest

from dotree_lib.config import load_config_text


class FakeTerminal:
    """Scripted terminal: keys and line answers are consumed in order."""

    def __init__(self, keys: str = "", lines=(), interactive: bool = True):
        self.keys = list(keys)
        self.lines = list(lines)
        self.interactive = interactive
        self.views = []
        self.prompts = []
        self.echoed = []

    def is_interactive(self) -> bool:
        return self.interactive

    def read_key(self, view) -> str:
        self.views.append(view)
        if not self.keys:
            raise KeyboardInterrupt
        return self.keys.pop(0)

    def read_line(self, label: str, default: Optional[str] = None) -> str:
        self.prompts.append((label, default))
        answer = self.lines.pop(0)
        if not answer and default is not None:
            return default
        return answer

    def echo_command(self, command: str) -> None:
        self.echoed.append(command)


class FakeSpawner:
    """Records invocations and returns scripted exit statuses (default 0)."""

    def __init__(self, *statuses: int):
        self.statuses = list(statuses)
        self.calls = []

    def __call__(self, argv, cwd, env) -> int:
        self.calls.append({"argv": list(argv), "cwd": cwd, "env": dict(env)})
        return self.statuses.pop(0) if self.statuses else 0

    @property
    def commands(self) -> list[str]:
        return [call["argv"][-1] for call in self.calls]


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def spawner():
    return FakeSpawner()


@pytest.fixture
def git_config():
    return load_config_text("""
        shell sh -c

        menu root {
            g: git
            c: custom
        }

        menu "Git" git {
            am: "git commit --amend --no-edit"
            s: "status" - "git status"
            c: commit
        }

        menu commit {
            a: "git commit -a"
            m: cmd {
                vars msg
                "git commit -m \\"$msg\\""
            }
        }

        menu custom {
            e: cmd {
                vars a, b="two"
                "echo $a $b"
            }
            r: cmd {
                set repeat, ignore_result
                "false"
            }
            q: @"echo quiet"
        }
    """)
