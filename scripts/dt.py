#!/usr/bin/env python3
"""
dt.py - Interactive command launcher

Runs dotree from a source checkout; installed copies use the `dt`
console script.
"""

import sys

from dotree_lib.cli import main

if __name__ == "__main__":
    sys.exit(main())
