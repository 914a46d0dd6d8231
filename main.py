#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py start [rows cols bomb_percentage]
    python main.py --help
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minesweeper.cli import main


if __name__ == "__main__":
    sys.exit(main())
