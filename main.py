#!/usr/bin/env python3
"""PomoCycle — entry point.

Run with:
    python main.py
    python -m pomocycle
"""

from pomocycle.__main__ import main


if __name__ == "__main__":
    main()
