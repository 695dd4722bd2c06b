#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py play [--seed N] [--no-color] [--no-clear]
    python run.py benchmark [--games N] [--seed N]
"""

import os
import sys

# Add the project root to Python path so the package imports without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectfour.interfaces.cli import main  # noqa: E402


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nGame interrupted.")
        sys.exit(130)
