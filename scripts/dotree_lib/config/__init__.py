"""
dotree_lib.config - Configuration language and model for dotree.

This package contains:
- syntax: syntax tree nodes produced by the parser
- parser: recursive-descent parser for .dt text
- dataclasses: semantic model (ConfigFile, Menu, entries, StringExpr)
- validation: key-prefix, reference and snippet-cycle checks
- builder: syntax tree to semantic model
- serialization: semantic model back to .dt text
- loader: file reading and global/local discovery
- constants: file names, environment variables and defaults
"""

from .constants import (
    CONFIG_FILE_NAME,
    LOCAL_CONFIG_FILE_NAME,
    HISTORY_FILE,
    ENV_DEFAULT_SHELL,
    ENV_ON_INVALID_KEY,
    ENV_LOG_LEVEL,
)

from .dataclasses import (
    CommandSetting,
    ShellDef,
    VarDef,
    Literal,
    SnippetRef,
    StringExpr,
    SubMenu,
    QuickCommand,
    Command,
    Entry,
    Menu,
    Settings,
    ConfigFile,
)

from .parser import (
    parse,
    parse_shell_words,
    parse_string_expr,
)

from .builder import build_config

from .validation import (
    find_prefix_conflicts,
    resolve_expr,
)

from .serialization import (
    to_source,
    save_config,
)

from .loader import (
    ConfigLocation,
    load_config,
    load_config_text,
    default_config_path,
    find_local_config,
    locate_config,
)

__all__ = [
    # Constants
    'CONFIG_FILE_NAME',
    'LOCAL_CONFIG_FILE_NAME',
    'HISTORY_FILE',
    'ENV_DEFAULT_SHELL',
    'ENV_ON_INVALID_KEY',
    'ENV_LOG_LEVEL',
    # Model
    'CommandSetting',
    'ShellDef',
    'VarDef',
    'Literal',
    'SnippetRef',
    'StringExpr',
    'SubMenu',
    'QuickCommand',
    'Command',
    'Entry',
    'Menu',
    'Settings',
    'ConfigFile',
    # Parsing and building
    'parse',
    'parse_shell_words',
    'parse_string_expr',
    'build_config',
    'find_prefix_conflicts',
    'resolve_expr',
    # Serialization
    'to_source',
    'save_config',
    # Loading
    'ConfigLocation',
    'load_config',
    'load_config_text',
    'default_config_path',
    'find_local_config',
    'locate_config',
]
