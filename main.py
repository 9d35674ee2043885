#!/usr/bin/env python3
"""StepClock entry point.

Run with:
    python main.py
    python -m stepclock
"""

from stepclock.__main__ import main


if __name__ == "__main__":
    main()
