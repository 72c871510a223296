#!/usr/bin/env python3
"""
Connector Dungeon - Main Entry Point

Runs the command-line generator from a source checkout without installing.

Usage:
    python main.py generate --seed 42
    python main.py plan --points 16 --format dot
"""

import sys

from connector_dungeon.cli import main

if __name__ == "__main__":
    sys.exit(main())
