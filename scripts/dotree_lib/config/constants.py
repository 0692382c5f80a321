"""
Configuration constants for dotree.

File names, environment variable names and default values used across
the configuration system.
"""

from pathlib import Path


# Configuration files
CONFIG_FILE_NAME = "dotree.dt"
LOCAL_CONFIG_FILE_NAME = "dotree.dt"
DEFAULT_CONFIG_DIR = Path.home() / ".config"

# Line-reading history for variable prompts
HISTORY_FILE = Path.home() / ".dt_history"

# Environment variables
ENV_DEFAULT_SHELL = "DT_DEFAULT_SHELL"
ENV_ON_INVALID_KEY = "DT_ON_INVALID_KEY"
ENV_LOG_LEVEL = "DT_LOG"
ENV_XDG_CONFIG_HOME = "XDG_CONFIG_HOME"
