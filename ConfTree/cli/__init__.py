"""
Command-line interface module for the ConfTree package.

Key Components:
- main: Main entry point for the CLI
- Commands: show, get, section, set and formats
"""

from ConfTree.cli.commands import main

__all__ = ['main']
