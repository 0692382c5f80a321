"""
Logging setup for dotree (stdlib logging with a rich handler).

Modules log through logging.getLogger(__name__); nothing is shown unless
the level is lowered with -v or the DT_LOG environment variable.
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from dotree_lib.config.constants import ENV_LOG_LEVEL

_INITIALIZED = False


def coerce_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """Convert common representations of logging levels to an int."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        val = level.strip().upper()
        if val.isdigit():
            return int(val)
        resolved = logging.getLevelName(val)
        if isinstance(resolved, int):
            return resolved
    return default


def verbosity_level(verbose: int) -> Optional[int]:
    """Map repeated -v flags to a level (None = not requested)."""
    if verbose <= 0:
        return None
    return logging.INFO if verbose == 1 else logging.DEBUG


def init_logging(level: Union[int, str, None] = None) -> None:
    """
    Configure the dotree logger.

    Level precedence: argument, then DT_LOG, then WARNING. Safe to call
    more than once; the handler is installed only once.
    """
    global _INITIALIZED

    if level is None:
        level = os.environ.get(ENV_LOG_LEVEL)
    resolved = coerce_level(level)

    logger = logging.getLogger("dotree_lib")
    logger.setLevel(resolved)
    if _INITIALIZED:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _INITIALIZED = True
