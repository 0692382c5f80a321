"""
dotree_lib.repl.commands - Execution stage

This package turns a selected menu entry into a process:
- variables: positional and interactive variable resolution
- shell: shell selection and process spawning
- run: the execution stage proper
"""

from .variables import split_remainder, resolve_variables
from .shell import resolve_shell, spawn_process
from .run import Invocation, should_echo, prepare_invocation, run_entry

__all__ = [
    'split_remainder', 'resolve_variables',
    'resolve_shell', 'spawn_process',
    'Invocation', 'should_echo', 'prepare_invocation', 'run_entry',
]
