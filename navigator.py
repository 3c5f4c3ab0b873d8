#!/usr/bin/env python3
"""Checkout entry point: `python navigator.py <slug>` runs the board navigator."""

import sys

from core.navigator.interface import navigator_app

if __name__ == "__main__":
    sys.exit(navigator_app.main())
else:
    # `import navigator` yields the CLI module itself.
    sys.modules[__name__] = navigator_app
