#!/usr/bin/env python3
"""Entry point for running office2site as a module.

This allows the package to be executed as:
    python -m office2site [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
