#!/usr/bin/env python3
"""
Entry point for objectivefs-volume CLI tool.
"""

import sys

from objectivefs_volume.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
