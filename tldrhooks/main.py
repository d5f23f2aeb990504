#!/usr/bin/env python3
"""
Main entry point for the Typer-based tldrhooks CLI.

This delegates to the UI layer in tldrhooks.ui.cli to keep the
console script mapping stable.
"""

from tldrhooks.ui.cli import run as tldrhooks


if __name__ == "__main__":
    tldrhooks()
