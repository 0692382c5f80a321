"""
Interactive prompt utilities for dotree.

Provides the line-reading service used to ask for command variables:
prompt_toolkit with persistent history and path completion.
"""

from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import PathCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory


def make_prompt_session(history_file: Optional[Path] = None) -> PromptSession:
    """Create the session used for variable prompts."""
    history = FileHistory(str(history_file)) if history_file else InMemoryHistory()
    return PromptSession(
        history=history,
        completer=PathCompleter(expanduser=True),
        complete_while_typing=False,
    )


def prompt_value(
    label: str,
    default: Optional[str] = None,
    session: Optional[PromptSession] = None,
) -> str:
    """
    Prompt for a value.

    Args:
        label: Prompt text to display
        default: Shown in brackets and returned when the answer is empty
        session: Session to read with (keeps history between prompts)

    Returns:
        The typed text, or the default if nothing was typed.

    KeyboardInterrupt and EOFError propagate: cancelling a prompt cancels
    the whole command.
    """
    suffix = f" [{default}]" if default is not None else ""
    message = f"{label}{suffix}: "
    if session is not None:
        result = session.prompt(message)
    else:
        result = make_prompt_session().prompt(message)

    if not result and default is not None:
        return default
    return result
