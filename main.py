#!/usr/bin/env python3
"""
Main entry point for the BF6 Stats Stream Deck plugin
"""

import sys

from bf6stats.main import cli

if __name__ == "__main__":
    sys.exit(cli())
