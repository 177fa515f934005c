#!/usr/bin/env python3
"""
Main entry point for the ConfTree package when run as a module.

Example:
    $ python -m ConfTree show settings.json
    $ python -m ConfTree get settings.json database::port --type int
"""

import sys

from ConfTree.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
