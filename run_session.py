#!/usr/bin/env python3
"""
Launcher script for the RPG UI state layer.
Running from the project root ensures reliable imports.
"""
import sys

from rpg_ui.core.main import main

if __name__ == "__main__":
    sys.exit(main())
