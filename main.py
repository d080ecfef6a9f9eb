#!/usr/bin/env python3
"""FlipFocus entry point.

Run with:
    python main.py
    python -m flipfocus
"""

from flipfocus.__main__ import main


if __name__ == "__main__":
    main()
