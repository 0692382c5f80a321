"""
Command-line entry point for dotree (`dt`).

Parses arguments, locates and loads the configuration, and runs a
session. Errors are reported here and mapped to exit statuses.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from dotree_lib import __version__
from dotree_lib.common import error
from dotree_lib.common.logging import init_logging, verbosity_level
from dotree_lib.config import load_config, locate_config
from dotree_lib.errors import CommandFailure, DotreeError
from dotree_lib.repl.session import InvalidKeyPolicy, Session, SessionOptions
from dotree_lib.repl.terminal import Terminal


EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dt",
        description="Navigate a tree of menus with single keys and run the selected command",
    )
    parser.add_argument("keys", nargs="?",
                        help="Keys processed character by character, as if typed")
    parser.add_argument("args", nargs="*",
                        help="Values for the selected command's variables, in order")
    parser.add_argument("-l", "--local", action="store_true",
                        help="Search the working directory and its parents for dotree.dt "
                             "and run commands from there")
    parser.add_argument("-c", "--config", type=Path,
                        help="Configuration file (default: $XDG_CONFIG_HOME/dotree.dt)")
    parser.add_argument("--on-invalid-key", choices=[p.value for p in InvalidKeyPolicy],
                        help="What to do after a key that matches nothing "
                             "(default: $DT_ON_INVALID_KEY or 'stay')")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More log output (repeat for debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None, terminal=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    init_logging(verbosity_level(args.verbose))

    try:
        location = locate_config(args.config, local=args.local)
        config = load_config(location.path)
        options = SessionOptions(
            workdir=location.workdir,
            policy=InvalidKeyPolicy.resolve(args.on_invalid_key),
            extra_args=list(args.args),
        )
        session = Session(config, terminal or Terminal(), options=options)
        return session.run(args.keys)
    except CommandFailure as e:
        error(str(e))
        return e.status
    except DotreeError as e:
        error(str(e))
        return EXIT_ERROR
    except (KeyboardInterrupt, EOFError):
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
