#!/usr/bin/env python3
"""
Main entry point for winebench
Compares two vision language models on extracting wine metadata from a bottle photo
"""

import sys

from winebench.cli import main

if __name__ == "__main__":
    sys.exit(main())
