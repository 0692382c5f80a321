"""
dotree_lib - Library behind the dt command launcher

This package contains the components of dotree:
- config: .dt grammar, parser, semantic model and discovery
- repl: key navigation, terminal I/O and command execution
- common: colored messages, prompts and logging setup
"""

__version__ = "0.8.0"
