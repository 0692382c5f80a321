"""
dotree_lib.common - Shared utilities for dotree

This module provides:
- colors: ANSI color codes and user-facing message helpers
- prompts: prompt_toolkit line reading for variable values
- logging: stdlib logging setup with a rich handler
"""

from .colors import Colors, warn, error
from .prompts import make_prompt_session, prompt_value

__all__ = [
    'Colors', 'warn', 'error',
    'make_prompt_session', 'prompt_value',
]
