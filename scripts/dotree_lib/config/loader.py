"""
Configuration loading and discovery for dotree.

Functions for locating the .dt file (explicit path, local mode or the
global XDG location) and turning its text into a ConfigFile.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotree_lib.errors import ConfigNotFound, ConfigSyntaxError, DotreeError

from .builder import build_config
from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_DIR,
    ENV_XDG_CONFIG_HOME,
    LOCAL_CONFIG_FILE_NAME,
)
from .dataclasses import ConfigFile
from .parser import parse

logger = logging.getLogger(__name__)


@dataclass
class ConfigLocation:
    """Where the configuration came from and where commands should run."""
    path: Path
    workdir: Optional[Path] = None  # None = the invoking working directory


def load_config_text(text: str) -> ConfigFile:
    """Parse and build a configuration from text."""
    return build_config(parse(text))


def load_config(config_file: Path) -> ConfigFile:
    """Load a configuration from a .dt file."""
    try:
        text = config_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigNotFound(f"Configuration file not found: {config_file}") from None
    except UnicodeDecodeError as e:
        raise DotreeError(
            f"Configuration file is not valid UTF-8: {config_file} ({e.reason} at byte {e.start})"
        ) from None
    except OSError as e:
        raise DotreeError(f"Cannot read configuration file {config_file}: {e.strerror}") from None
    try:
        config = load_config_text(text)
    except ConfigSyntaxError as e:
        raise e.with_path(str(config_file)) from None
    logger.debug("loaded %s", config_file)
    return config


def default_config_path() -> Path:
    """Global config location, honoring XDG_CONFIG_HOME."""
    xdg = os.environ.get(ENV_XDG_CONFIG_HOME)
    base = Path(xdg) if xdg else DEFAULT_CONFIG_DIR
    return base / CONFIG_FILE_NAME


def find_local_config(start: Path) -> Optional[Path]:
    """Search `start` and its parents for a local config file."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / LOCAL_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def locate_config(
    arg_path: Optional[Path] = None,
    local: bool = False,
    cwd: Optional[Path] = None,
) -> ConfigLocation:
    """
    Resolve which configuration file to use.

    Precedence: explicit path, then local mode search, then the global
    location. In local mode commands run in the directory holding the
    discovered file.

    Raises:
        ConfigNotFound: if local mode finds nothing
    """
    if arg_path:
        return ConfigLocation(path=arg_path)
    if local:
        start = cwd or Path.cwd()
        found = find_local_config(start)
        if found is None:
            raise ConfigNotFound(
                f"No {LOCAL_CONFIG_FILE_NAME} found in {start} or any parent directory"
            )
        return ConfigLocation(path=found, workdir=found.parent)
    return ConfigLocation(path=default_config_path())
